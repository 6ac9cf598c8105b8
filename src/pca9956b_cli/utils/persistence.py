"""Shared utilities for loading Pydantic models from JSON files.

Error Handling:
    Low-level Pydantic/IO errors are converted into user-friendly
    PanelError exceptions with recovery hints (see exceptions.handlers).

The panel only reads configuration; nothing is written back between runs.
"""

import logging
from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from pca9956b_cli.exceptions import ConfigFileInvalidError, ConfigurationError, wrap_pydantic_error

logger = logging.getLogger(__name__)

# Type variable bound to Pydantic BaseModel
T = TypeVar("T", bound=BaseModel)


class PydanticPersistence:
    """
    Stateless helpers for Pydantic model files.

    Example Usage:
        ```python
        config = PydanticPersistence.load_json(
            path=Path("config.json"),
            model_type=PanelConfig
        )
        ```
    """

    @staticmethod
    def load_json(path: Path, model_type: type[T]) -> T:
        """
        Load and validate a Pydantic model from a JSON file.

        Args:
            path: Path to the JSON file to load
            model_type: The Pydantic model class to validate against

        Returns:
            Validated model instance

        Raises:
            FileNotFoundError: If the file doesn't exist
            ConfigFileInvalidError: If the JSON syntax is invalid
            ConfigValidationError: If the JSON content fails Pydantic validation
        """
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        try:
            json_content = path.read_text()

            if not json_content or not json_content.strip():
                raise ConfigFileInvalidError(str(path), "File is empty")

            model = model_type.model_validate_json(json_content)

            logger.debug(f"Loaded {model_type.__name__} from {path}")
            return model

        except ValidationError as e:
            logger.error(f"Validation error loading {model_type.__name__} from {path}: {e}")
            raise wrap_pydantic_error(e, str(path)) from e

        except ConfigurationError:
            raise

        except OSError as e:
            logger.error(f"Could not read {path}: {e}")
            raise ConfigFileInvalidError(str(path), f"Unreadable file: {e}") from e
