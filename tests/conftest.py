import os
import pytest

# The mapping file shipped with the project
MAPPING_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "..", "mapping.yml")

SAMPLE_SOURCE = """package main

import "std"

func main() {
	std.GetCallerAt()
	std.SomeOtherFunction()
	std.PrevRealm().Addr()
	Addr()
}
"""

SAMPLE_EXPECTED = """package main

import "std"

func main() {
	std.CallerAt()
	std.SomeOtherFunction()
	std.PreviousRealm().Address()
	Addr()
}
"""


@pytest.fixture
def sample_source():
    return SAMPLE_SOURCE


@pytest.fixture
def sample_expected():
    return SAMPLE_EXPECTED


@pytest.fixture
def name_map():
    return {
        "GetCallerAt": "CallerAt",
        "Addr": "Address",
        "GetOrigSend": "OriginSend",
        "GetOrigCaller": "OriginCaller",
        "PrevRealm": "PreviousRealm",
    }


@pytest.fixture
def mapping_path():
    return MAPPING_PATH


# Writes a file under tmp_path (creating directories as needed) and returns its path
@pytest.fixture
def write_file(tmp_path):
    def write(relative_path, content, mode=None):
        path = tmp_path / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_bytes(content.encode("utf-8"))
        if mode is not None:
            os.chmod(path, mode)
        return path

    return write
