import logging
import os

from dotenv import load_dotenv

from riskfusion.config.duplication_config import DuplicationConfig, parse_bool

load_dotenv()

logger = logging.getLogger("riskfusion.config")

_ENV_FIELDS = {
    "RISKFUSION_SIMILARITY_THRESHOLD": "similarity_threshold",
    "RISKFUSION_TITLE_WEIGHT": "title_weight",
    "RISKFUSION_DESCRIPTION_WEIGHT": "description_weight",
    "RISKFUSION_CATEGORY_WEIGHT": "category_weight",
}


def load_default_config() -> DuplicationConfig:
    """
    Builds the service-wide default config from the environment.

    RISKFUSION_PRESET picks the starting point; the per-field variables
    override it. Used only when a caller supplies no config of its own.
    """
    preset = os.getenv("RISKFUSION_PRESET")
    overrides = {}

    for env_name, field_name in _ENV_FIELDS.items():
        raw = os.getenv(env_name)
        if raw is not None and raw.strip():
            overrides[field_name] = float(raw)

    raw_override = os.getenv("RISKFUSION_ALLOW_MANUAL_OVERRIDE")
    if raw_override is not None and raw_override.strip():
        overrides["allow_manual_override"] = parse_bool(raw_override)

    if preset:
        config = DuplicationConfig.from_preset(preset, **overrides)
    else:
        config = DuplicationConfig(**overrides)

    for note in config.advisories:
        logger.warning(f"Default config advisory: {note}")

    return config
