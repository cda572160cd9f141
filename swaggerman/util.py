import json
import re

import yaml

from .exceptions import ParseError

RE_PATH_VARIABLE = re.compile(r'\{(.*?)\}')  # noqa: W605

HTTP_VERBS = [
    "get",
    "put",
    "post",
    "delete",
    "options",
    "head",
    "patch",
    "trace",
]


def strip_nulls(d):
    if isinstance(d, dict):
        return {k: strip_nulls(v) for k, v in d.items() if v is not None}
    elif isinstance(d, list):
        return [strip_nulls(v) for v in d]
    return d


def load_file(f):
    if f.endswith(('.yaml', '.yml')):
        load_f = yaml.safe_load
    else:
        load_f = json.load
    try:
        with open(f, 'r', encoding='utf-8') as fp:
            return load_f(fp)
    except OSError as e:
        raise ParseError(f"Unable to read {f}: {e}") from e
    except (UnicodeDecodeError, json.JSONDecodeError, yaml.YAMLError) as e:
        raise ParseError(f"Unable to parse {f}: {e}") from e


def dump_file(f, content):
    with open(f, 'w', encoding='utf-8') as fp:
        json.dump(content, fp, indent=2)
        fp.write('\n')


def path_segments(path: str) -> list:
    return [part for part in path.split('/') if part]


def path_variables(path: str) -> list:
    """Distinct ``{name}`` segments of a path template in first-seen order."""
    seen = []
    for name in RE_PATH_VARIABLE.findall(path):
        if name not in seen:
            seen.append(name)
    return seen
