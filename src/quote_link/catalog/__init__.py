"""Package template catalog."""
from .catalog import TemplateCatalog, load_default_catalog
from .models import PackageTemplate

__all__ = ["PackageTemplate", "TemplateCatalog", "load_default_catalog"]
