"""
NRM2 Template Provider - Default cost elements for new cost models.

Loads the NRM2 defaults file ({"elements": [...]}) once and serves the
cached list. Use get_template_provider() to obtain the shared instance.
"""

from functools import lru_cache
from pathlib import Path
from typing import List, Optional
import json
import logging
import sys

from pydantic import ValidationError as PydanticValidationError

sys.path.append(str(Path(__file__).parent.parent))

from config import settings
from models import NRM2Element
from services.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class NRM2TemplateProvider:
    """
    Provider of the standard NRM2 elements.

    The list is read on first use and cached with no expiry. Every new cost
    model gets one zero-quantity measured work per element, in file order.
    """

    def __init__(self, config_path: Optional[Path] = None):
        self._config_path = Path(config_path or settings.NRM2_CONFIG_PATH)
        self._cache: Optional[List[NRM2Element]] = None

    @property
    def config_path(self) -> Path:
        return self._config_path

    def load_defaults(self) -> List[NRM2Element]:
        """
        Read the NRM2 elements from disk.

        Returns:
            List of NRM2 elements in file order

        Raises:
            ConfigurationError: If the file is missing, unreadable or malformed
        """
        try:
            elements = self._read_elements()
        except ConfigurationError as e:
            logger.error(f"✗ Failed to load NRM2 defaults: {e.message}")
            raise

        logger.info(f"✓ Loaded {len(elements)} NRM2 default elements")
        return elements

    def _read_elements(self) -> List[NRM2Element]:
        if not self._config_path.exists():
            raise ConfigurationError(f"NRM2 config file not found: {self._config_path}")

        try:
            with open(self._config_path, 'r', encoding='utf-8') as f:
                content = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in NRM2 config file: {e}")
        except OSError as e:
            raise ConfigurationError(f"Cannot read NRM2 config file: {e}")

        data = content.get('elements') if isinstance(content, dict) else None
        if not isinstance(data, list):
            raise ConfigurationError('NRM2 configuration must have an "elements" array')

        elements = []
        for index, raw in enumerate(data):
            try:
                elements.append(NRM2Element.model_validate(raw))
            except PydanticValidationError as e:
                raise ConfigurationError(f"Invalid NRM2 element at index {index}: {e}")
        return elements

    def get_defaults(self) -> List[NRM2Element]:
        """
        Get the NRM2 elements, loading them on first call.

        Returns copies, so callers cannot alter the cached list.
        """
        if self._cache is None:
            self._cache = self.load_defaults()
        return [element.model_copy() for element in self._cache]

    def clear_cache(self) -> None:
        """Forget the cached elements; the next get_defaults() reloads them."""
        self._cache = None
        logger.info("✓ NRM2 cache cleared")


@lru_cache(maxsize=1)
def get_template_provider() -> NRM2TemplateProvider:
    """
    Get the process-wide NRM2 template provider.

    Returns:
        NRM2TemplateProvider bound to settings.NRM2_CONFIG_PATH
    """
    return NRM2TemplateProvider(settings.NRM2_CONFIG_PATH)
