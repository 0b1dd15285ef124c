from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Mapping, Tuple

# Classifier defaults
DEFAULT_SIMILARITY_THRESHOLD = 0.6
DEFAULT_TITLE_WEIGHT = 0.4
DEFAULT_DESCRIPTION_WEIGHT = 0.3
DEFAULT_CATEGORY_WEIGHT = 0.3

# A weight sum within this distance of 1.0 raises no advisory
WEIGHT_SUM_TOLERANCE = 0.05

PRESETS: Dict[str, Dict[str, float]] = {
    "strict": {
        "similarity_threshold": 0.8,
        "title_weight": 0.5,
        "description_weight": 0.4,
        "category_weight": 0.1,
    },
    "balanced": {
        "similarity_threshold": 0.6,
        "title_weight": 0.4,
        "description_weight": 0.3,
        "category_weight": 0.3,
    },
    "lenient": {
        "similarity_threshold": 0.4,
        "title_weight": 0.3,
        "description_weight": 0.3,
        "category_weight": 0.4,
    },
}

# Threshold bands shown next to the threshold slider, highest first
THRESHOLD_BANDS = (
    (0.8, "Very Strict", "May miss legitimate duplicates"),
    (0.7, "Strict", "Conservative duplicate detection"),
    (0.5, "Balanced", "Recommended setting"),
    (0.3, "Lenient", "May filter unique risks"),
)

_CAMEL_CASE_KEYS = {
    "similarityThreshold": "similarity_threshold",
    "titleWeight": "title_weight",
    "descriptionWeight": "description_weight",
    "categoryWeight": "category_weight",
    "allowManualOverride": "allow_manual_override",
    "enableManualOverrides": "allow_manual_override",
}


_TRUTHY = {"1", "true", "yes", "on"}

_FLOAT_FIELDS = ("similarity_threshold", "title_weight", "description_weight", "category_weight")


def parse_bool(value: Any) -> bool:
    """
    Strings count as true only when they read as "1", "true", "yes" or "on".
    """
    if isinstance(value, str):
        return value.strip().lower() in _TRUTHY
    return bool(value)


def config_overrides(data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Normalizes a camelCase or snake_case mapping into DuplicationConfig
    field values. None values and unknown keys are dropped.
    """
    known = {f.name for f in fields(DuplicationConfig)}
    values: Dict[str, Any] = {}

    for key, value in data.items():
        name = _CAMEL_CASE_KEYS.get(key, key)
        if name in known and value is not None:
            values[name] = value

    for name in _FLOAT_FIELDS:
        if name in values:
            values[name] = float(values[name])
    if "allow_manual_override" in values:
        values["allow_manual_override"] = parse_bool(values["allow_manual_override"])

    return values


class UnknownPresetError(KeyError):
    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Unknown preset '{self.name}'. Available presets: {sorted(PRESETS)}"


@dataclass(frozen=True)
class DuplicationConfig:
    """
    Weights and threshold consumed by the duplicate classifier.

    Weights need not sum to 1.0 and the threshold may sit outside [0, 1].
    Nothing is rejected or corrected; `advisories` lists what a caller
    should warn about.
    """
    similarity_threshold: float = DEFAULT_SIMILARITY_THRESHOLD
    title_weight: float = DEFAULT_TITLE_WEIGHT
    description_weight: float = DEFAULT_DESCRIPTION_WEIGHT
    category_weight: float = DEFAULT_CATEGORY_WEIGHT
    allow_manual_override: bool = True

    @classmethod
    def from_preset(cls, name: str, **overrides: Any) -> "DuplicationConfig":
        key = name.strip().lower()
        if key not in PRESETS:
            raise UnknownPresetError(name)
        return replace(cls(**PRESETS[key]), **overrides)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DuplicationConfig":
        """
        Accepts camelCase or snake_case keys. Missing fields take the
        defaults, unknown keys are ignored.
        """
        return cls(**config_overrides(data))

    @property
    def weights_sum(self) -> float:
        return self.title_weight + self.description_weight + self.category_weight

    @property
    def weights_balanced(self) -> bool:
        return abs(self.weights_sum - 1.0) <= WEIGHT_SUM_TOLERANCE

    @property
    def threshold_in_range(self) -> bool:
        return 0.0 <= self.similarity_threshold <= 1.0

    @property
    def weights_in_range(self) -> bool:
        return all(
            0.0 <= w <= 1.0
            for w in (self.title_weight, self.description_weight, self.category_weight)
        )

    @property
    def advisories(self) -> Tuple[str, ...]:
        notes = []

        if not self.weights_balanced:
            notes.append(
                f"Weights should add up to approximately 1.0 for optimal results. "
                f"Current sum: {self.weights_sum:.2f}"
            )
        if not self.threshold_in_range:
            notes.append(
                f"Similarity threshold {self.similarity_threshold} is outside [0, 1]"
            )
        if not self.weights_in_range:
            notes.append("One or more weights are outside [0, 1]")

        return tuple(notes)

    @property
    def threshold_band(self) -> str:
        for floor, label, _ in THRESHOLD_BANDS:
            if self.similarity_threshold >= floor:
                return label
        return "Very Lenient"

    def to_dict(self) -> dict:
        return {
            "similarityThreshold": self.similarity_threshold,
            "titleWeight": self.title_weight,
            "descriptionWeight": self.description_weight,
            "categoryWeight": self.category_weight,
            "allowManualOverride": self.allow_manual_override,
        }
