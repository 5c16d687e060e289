"""YAML loader for field display options.

The document mirrors FieldDisplayOptions, with camelCase or snake_case keys:

    calcs: [mean, max]
    defaults:
      unit: ms
      decimals: 1
      thresholds:
        - {color: green, value: null}
        - {color: red, value: 80}
    overrides:
      - matcher: {pattern: "^cpu"}
        properties: {unit: percent, max: 100}
"""

from pathlib import Path

import yaml
from pydantic import ValidationError

from fieldcalc.core.exceptions import FieldOptionsLoadError
from fieldcalc.core.logging import get_logger
from fieldcalc.display.models import FieldDisplayOptions

logger = get_logger(__name__)


def load_field_display_options(config_path: Path | str) -> FieldDisplayOptions:
    """Load field display options from a YAML file.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Validated FieldDisplayOptions; defaults for an empty document

    Raises:
        FieldOptionsLoadError: If file not found, invalid YAML, or validation fails
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FieldOptionsLoadError(config_path, "configuration file not found")

    try:
        with open(config_path, encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise FieldOptionsLoadError(config_path, f"invalid YAML: {e}") from e

    if not raw:
        logger.warning("field_options_empty", path=str(config_path))
        return FieldDisplayOptions()

    if not isinstance(raw, dict):
        raise FieldOptionsLoadError(config_path, "top level must be a mapping")

    try:
        options = FieldDisplayOptions.model_validate(raw)
    except ValidationError as e:
        raise FieldOptionsLoadError(config_path, f"validation error: {e}") from e

    logger.info(
        "field_options_loaded",
        path=str(config_path),
        calcs=options.calcs,
        overrides=len(options.overrides),
    )
    return options
