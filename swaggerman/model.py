import json
from typing import Optional

from pydantic import BaseModel as PyDanticBaseModel, ConfigDict

from .util import dump_file, strip_nulls
from . import logger


class ReferenceResolve:
    @classmethod
    def find_ref(cls, ref: str, document):
        """Walk a local JSON pointer through ``document``.

        Returns ``None`` when any segment of the pointer is missing.
        """
        if not isinstance(ref, str) or not ref.startswith('#'):
            return None
        target = document
        for seek in ref.split('/')[1:]:
            seek = seek.replace('~1', '/').replace('~0', '~')
            if not seek:
                continue
            if isinstance(target, list) and seek.isdigit():
                index = int(seek)
                if index >= len(target):
                    return None
                target = target[index]
            elif isinstance(target, dict) and seek in target:
                target = target[seek]
            else:
                return None
        return target

    @classmethod
    def resolve_ref(cls, ref: str, spec) -> Optional[dict]:
        """Resolve ``ref`` against a spec, ``None`` if it points nowhere."""
        if isinstance(spec, BaseModel):
            spec = spec.to_dict()
        resolved = cls.find_ref(ref, spec)
        if resolved is None or not isinstance(resolved, dict):
            logger.debug(f"Reference {ref} not found")
            return None
        logger.debug(f"Resolved reference {ref}")
        return resolved


class BaseModel(PyDanticBaseModel, ReferenceResolve):
    model_config = ConfigDict(extra='allow', populate_by_name=True)

    def to_file(self, path):
        dump_file(path, self.to_payload())

    def to_dict(self, no_empty=True):
        d = json.loads(self.model_dump_json(by_alias=True))
        if no_empty:
            d = strip_nulls(d)
        return d

    def to_payload(self):
        return self.to_dict()
