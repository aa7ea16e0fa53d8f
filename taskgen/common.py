import yaml


TASKGEN_TOOL_NAME = "taskgen"


class TaskgenException(Exception):
    pass


def file_write(filepath: str, content: str):
    try:
        with open(filepath, "w", encoding="utf-8") as f:
            f.write(content)
    except IOError as exc:
        raise TaskgenException(f'Failed to write to "{filepath}": {exc}') from exc


def file_read(filepath: str):
    try:
        with open(filepath, "r", encoding="utf-8") as f:
            return f.read()
    except IOError as exc:
        raise TaskgenException(f'Failed to read from "{filepath}": {exc}') from exc


def file_load_yaml(filepath: str):
    try:
        with open(filepath, "r", encoding="utf-8") as f:
            return yaml.safe_load(f)
    except (IOError, yaml.YAMLError) as exc:
        raise TaskgenException(f'Failed to load YAML from "{filepath}": {exc}') from exc


def isspace(s: str) -> bool:
    """
    Returns whether a string, s, is empty, whitespace, or None.
    """

    if s is None:
        return True

    return len(s.strip()) == 0
