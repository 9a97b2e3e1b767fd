from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional, Union

import yaml

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "en"
PLURAL_FORMS = ("one", "other")

Template = Union[str, Dict[str, str]]


def default_strings_dir() -> Path:
    return Path(__file__).resolve().parent.parent / "data" / "strings"


class StringTable:
    """Localized string templates loaded from ``data/strings/<language>.yaml``.

    A key maps either to a template string or to plural forms
    (``one`` / ``other``). Templates use ``str.format`` named fields.
    """

    def __init__(self, language: str = DEFAULT_LANGUAGE, base_dir: Optional[Path] = None) -> None:
        self._base_dir = base_dir or default_strings_dir()
        self._language = language
        self._templates = self._load_templates()

    @property
    def language(self) -> str:
        return self._language

    def keys(self) -> list[str]:
        return sorted(self._templates)

    def text(self, key: str, **params: object) -> str:
        template = self._templates.get(key)
        if template is None:
            logger.warning("Missing string %r for language %s", key, self._language)
            return key
        if isinstance(template, dict):
            template = template["other"]
        return self._format(key, template, params)

    def plural(self, key: str, count: int, **params: object) -> str:
        template = self._templates.get(key)
        if template is None:
            logger.warning("Missing string %r for language %s", key, self._language)
            return key
        if isinstance(template, dict):
            form = "one" if count == 1 and "one" in template else "other"
            template = template[form]
        return self._format(key, template, {"count": count, **params})

    @staticmethod
    def _format(key: str, template: str, params: Dict[str, object]) -> str:
        try:
            return template.format(**params)
        except (KeyError, IndexError, ValueError) as e:
            logger.warning("Could not format string %r: %s", key, e)
            return template

    def _load_templates(self) -> Dict[str, Template]:
        path = self._base_dir / f"{self._language}.yaml"
        if not path.exists():
            if self._language == DEFAULT_LANGUAGE:
                raise FileNotFoundError(f"String table not found: {path}")
            logger.warning(
                "No strings for language %r, falling back to %s", self._language, DEFAULT_LANGUAGE
            )
            self._language = DEFAULT_LANGUAGE
            path = self._base_dir / f"{DEFAULT_LANGUAGE}.yaml"
            if not path.exists():
                raise FileNotFoundError(f"String table not found: {path}")

        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
        if not raw or not isinstance(raw, dict):
            raise ValueError(f"{path.name}: expected a YAML mapping of string keys")

        templates: Dict[str, Template] = {}
        for key, value in raw.items():
            if isinstance(value, str):
                templates[str(key)] = value
            elif isinstance(value, dict):
                forms = {str(k): str(v) for k, v in value.items()}
                if "other" not in forms:
                    raise ValueError(f"{path.name}: plural string {key!r} has no 'other' form")
                unknown = set(forms) - set(PLURAL_FORMS)
                if unknown:
                    raise ValueError(
                        f"{path.name}: plural string {key!r} has unknown forms {sorted(unknown)}"
                    )
                templates[str(key)] = forms
            else:
                raise ValueError(f"{path.name}: {key!r} must be a string or plural mapping")
        return templates
