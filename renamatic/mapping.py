from types import MappingProxyType
import yaml
from renamatic.errors import MappingLoadError


# Load a mapping of old member names to new member names from a YAML file
# The file must contain a single dictionary of strings to strings (an empty file gives an empty mapping)
# Returns a read-only mapping, raising MappingLoadError if the file cannot be read or is not in the right form
def load_mapping(path):
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise MappingLoadError(path, e.strerror or str(e)) from e
    except UnicodeDecodeError as e:
        raise MappingLoadError(path, "file is not valid UTF-8") from e
    except yaml.YAMLError as e:
        raise MappingLoadError(path, "invalid YAML: " + str(e)) from e

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise MappingLoadError(path, "expected a dictionary of names, found " + type(data).__name__)

    for old_name, new_name in data.items():
        if not isinstance(old_name, str) or len(old_name) == 0:
            raise MappingLoadError(path, "mapping key " + repr(old_name) + " is not a non-empty string")
        if not isinstance(new_name, str) or len(new_name) == 0:
            raise MappingLoadError(path, "mapping value for " + repr(old_name) + " is not a non-empty string")

    return MappingProxyType(dict(data))
