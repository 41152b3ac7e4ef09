import pytest
from renamatic import mapping
from renamatic.errors import MappingLoadError


def test_load_project_mapping(mapping_path):
    name_map = mapping.load_mapping(mapping_path)
    assert len(name_map) == 9
    assert name_map["GetCallerAt"] == "CallerAt"
    assert name_map["Addr"] == "Address"
    assert name_map["GetOrigSend"] == "OriginSend"
    assert name_map["GetOrigCaller"] == "OriginCaller"
    assert name_map["PrevRealm"] == "PreviousRealm"


def test_mapping_is_read_only(mapping_path):
    name_map = mapping.load_mapping(mapping_path)
    with pytest.raises(TypeError):
        name_map["Addr"] = "Other"


def test_empty_file(write_file):
    path = write_file("empty.yml", "")
    assert len(mapping.load_mapping(str(path))) == 0


def test_missing_file(tmp_path):
    with pytest.raises(MappingLoadError) as info:
        mapping.load_mapping(str(tmp_path / "missing.yml"))
    assert "Failed to load mapping file" in str(info.value)


def test_invalid_yaml(write_file):
    path = write_file("invalid_mapping.yaml", "invalid_yaml: [unbalanced")
    with pytest.raises(MappingLoadError) as info:
        mapping.load_mapping(str(path))
    assert "invalid YAML" in str(info.value)


@pytest.mark.parametrize("content", [
    "- Addr\n- Address\n",
    "just a string\n",
    "Addr: 3\n",
    "Addr:\n",
    "Addr: ''\n",
    "1: Address\n",
    "Addr: [Address]\n",
])
def test_wrong_shape(write_file, content):
    path = write_file("mapping.yml", content)
    with pytest.raises(MappingLoadError):
        mapping.load_mapping(str(path))
