"""Template catalog implementation."""

from functools import lru_cache
from pathlib import Path
from typing import Iterable, Iterator

import yaml

from .models import PackageTemplate

DEFAULT_CATALOG_PATH = Path(__file__).parent.parent / "data" / "templates.yaml"


class TemplateCatalog:
    """
    Immutable, ordered collection of package templates.

    A template's position in the catalog is its index inside quote links,
    so the catalog is passed explicitly to every encode/decode call instead
    of being read from global state. Two catalogs with the same templates in
    the same order produce and accept the same links.
    """

    def __init__(self, templates: Iterable[PackageTemplate]):
        self._templates: tuple[PackageTemplate, ...] = tuple(templates)
        self._index: dict[str, int] = {}
        for position, template in enumerate(self._templates):
            if template.name in self._index:
                raise ValueError(f"Duplicate template name in catalog: '{template.name}'")
            self._index[template.name] = position

    @classmethod
    def from_yaml(cls, yaml_path: str | Path) -> "TemplateCatalog":
        """
        Load catalog from YAML file.

        Args:
            yaml_path: Path to a templates.yaml file

        Returns:
            Initialized TemplateCatalog instance

        Raises:
            FileNotFoundError: If YAML file doesn't exist
            yaml.YAMLError: If YAML is malformed
            ValueError: If the YAML structure or a template is invalid
        """
        yaml_file = Path(yaml_path)
        if not yaml_file.exists():
            raise FileNotFoundError(f"Catalog YAML not found: {yaml_path}")

        with open(yaml_file, encoding="utf-8") as f:
            data = yaml.safe_load(f)

        if not isinstance(data, dict):
            raise ValueError(f"Invalid YAML structure: expected dict, got {type(data).__name__}")

        templates = data.get("templates")
        if not isinstance(templates, list):
            raise ValueError("'templates' must be a list")

        return cls(PackageTemplate.from_dict(entry) for entry in templates)

    def __len__(self) -> int:
        return len(self._templates)

    def __iter__(self) -> Iterator[PackageTemplate]:
        return iter(self._templates)

    def __contains__(self, name: object) -> bool:
        return name in self._index

    @property
    def templates(self) -> tuple[PackageTemplate, ...]:
        return self._templates

    def get(self, name: str) -> PackageTemplate | None:
        """
        Get template by name.

        Args:
            name: Template name

        Returns:
            PackageTemplate if found, None otherwise
        """
        position = self._index.get(name)
        return None if position is None else self._templates[position]

    def index_of(self, name: str) -> int | None:
        """Return the catalog position of the named template, or None."""
        return self._index.get(name)

    def at(self, index: int) -> PackageTemplate | None:
        """Return the template at `index`, or None when out of range."""
        if 0 <= index < len(self._templates):
            return self._templates[index]
        return None

    def names(self) -> list[str]:
        return [template.name for template in self._templates]


@lru_cache(maxsize=None)
def _load_catalog(path: str) -> TemplateCatalog:
    return TemplateCatalog.from_yaml(path)


def load_default_catalog() -> TemplateCatalog:
    """
    Load the configured catalog (QUOTE_LINK_CATALOG_PATH) or the bundled one.

    The result is cached per path; catalogs are immutable.
    """
    from ..config import Config

    return _load_catalog(str(Config.CATALOG_PATH or DEFAULT_CATALOG_PATH))
