# inout/design_parser.py
"""
YAML design and sweep files.

This is the validation boundary of the package: the physics modules assume
their inputs already satisfy the ranges enforced here.
"""
import dataclasses
from typing import Any, Dict, Optional, Tuple

import pint
import yaml
from cerberus import Validator

from core.constants import INPUT_LIMITS, MATCHING_ALIASES
from core.exceptions import DesignValidationError, SweepConfigError
from core.types import AntennaDesign
from inout.presets import get_preset
from utils.logging_config import get_logger

logger = get_logger(__name__)

ureg = pint.UnitRegistry()

SWEEPABLE_FIELDS = ("frequency", "length", "feed_position", "wire_diameter")

# Sweep axes use the model's units; feed_position is a 0..1 fraction here.
SWEEP_LIMITS: Dict[str, Tuple[float, float]] = {
    'frequency': (INPUT_LIMITS.MIN_FREQUENCY, INPUT_LIMITS.MAX_FREQUENCY),
    'length': (INPUT_LIMITS.MIN_LENGTH, INPUT_LIMITS.MAX_LENGTH),
    'feed_position': (INPUT_LIMITS.MIN_FEED_POINT / 100.0, INPUT_LIMITS.MAX_FEED_POINT / 100.0),
    'wire_diameter': (INPUT_LIMITS.MIN_WIRE_DIAMETER, INPUT_LIMITS.MAX_WIRE_DIAMETER),
}

_CANONICAL_UNITS = {
    "frequency": "MHz",
    "length": "m",
    "wire_diameter": "mm",
    "reference_impedance": "ohm",
}


def parse_quantity(value: Any, unit: str) -> float:
    """
    Convert a number or a unit string ("35 ft", "14.2 MHz") to *unit*.

    Bare numbers are taken to already be in *unit*.
    """
    if isinstance(value, bool):
        raise ValueError("boolean is not a quantity")
    if isinstance(value, (int, float)):
        return float(value)
    quantity = ureg.Quantity(str(value).strip())
    if quantity.dimensionless:
        return float(quantity.magnitude)
    return float(quantity.to(unit).magnitude)


def normalize_ratio(value: Any) -> str:
    """Normalise a balun ratio spelling to a key of MATCHING_ALIASES."""
    if value is None:
        return "none"
    if isinstance(value, int) and not isinstance(value, bool):
        # YAML 1.1 reads an unquoted 4:1 as the base-60 integer 241
        if value >= 60:
            return f"{value // 60}:{value % 60}"
        return f"{value}:1"
    return str(value).strip().lower()


def _coercer(field: str):
    unit = _CANONICAL_UNITS[field]
    return lambda value: parse_quantity(value, unit)


DESIGN_SCHEMA: Dict[str, Any] = {
    'preset': {'type': 'string', 'required': False},
    'frequency': {
        'type': 'float', 'coerce': _coercer('frequency'),
        'min': INPUT_LIMITS.MIN_FREQUENCY, 'max': INPUT_LIMITS.MAX_FREQUENCY,
    },
    'length': {
        'type': 'float', 'coerce': _coercer('length'),
        'min': INPUT_LIMITS.MIN_LENGTH, 'max': INPUT_LIMITS.MAX_LENGTH,
    },
    'feed_point': {
        'type': 'float', 'coerce': float,
        'min': INPUT_LIMITS.MIN_FEED_POINT, 'max': INPUT_LIMITS.MAX_FEED_POINT,
    },
    'wire_diameter': {
        'type': 'float', 'coerce': _coercer('wire_diameter'),
        'min': INPUT_LIMITS.MIN_WIRE_DIAMETER, 'max': INPUT_LIMITS.MAX_WIRE_DIAMETER,
    },
    'balun_ratio': {
        'type': 'string', 'nullable': True, 'coerce': normalize_ratio,
        'allowed': list(MATCHING_ALIASES),
    },
    'reference_impedance': {
        'type': 'float', 'coerce': _coercer('reference_impedance'), 'min': 1.0,
    },
}

# Without a preset every physical field is mandatory.
_REQUIRED_WITHOUT_PRESET = ('frequency', 'length', 'feed_point', 'wire_diameter')

SWEEP_SCHEMA: Dict[str, Any] = {
    'sweep': {
        'type': 'list',
        'required': True,
        'minlength': 1,
        'schema': {
            'type': 'dict',
            'schema': {
                'param': {'type': 'string', 'required': True, 'allowed': list(SWEEPABLE_FIELDS)},
                'range': {
                    'type': 'list',
                    'minlength': 2,
                    'maxlength': 2,
                    'schema': {'type': 'number', 'coerce': float},
                    'excludes': 'values',
                },
                'points': {'type': 'integer', 'min': 1, 'dependencies': 'range'},
                'scale': {'type': 'string', 'allowed': ['linear', 'log'], 'dependencies': 'range'},
                'values': {
                    'type': 'list',
                    'minlength': 1,
                    'schema': {'type': 'number', 'coerce': float},
                    'excludes': 'range',
                },
            },
        },
    },
}


def validate_schema(data: Any, schema: Dict[str, Any], error_cls=DesignValidationError) -> Dict[str, Any]:
    """
    Validate a parsed YAML document against a Cerberus schema.

    Returns:
        The normalised (coerced) document.

    Raises:
        error_cls: If the document is not a mapping or fails validation.
    """
    if not isinstance(data, dict):
        raise error_cls(f"Expected a mapping at the top level, got {type(data).__name__}")
    validator = Validator(schema)
    if not validator.validate(data):
        logger.error("Schema validation errors: %s", validator.errors)
        raise error_cls("Schema validation failed: " + str(validator.errors))
    return validator.document


def design_from_dict(data: Any) -> AntennaDesign:
    """
    Build an AntennaDesign from a mapping (already parsed YAML/JSON).

    A ``preset`` key supplies defaults that the remaining keys override.
    The ``feed_point`` field is a percentage and becomes a 0..1 fraction.
    """
    doc = validate_schema(data, DESIGN_SCHEMA)

    if 'preset' in doc:
        base = get_preset(doc['preset']).to_design()
    else:
        missing = [f for f in _REQUIRED_WITHOUT_PRESET if f not in doc]
        if missing:
            raise DesignValidationError(f"Missing design fields: {', '.join(missing)}")
        base = AntennaDesign()

    overrides: Dict[str, Any] = {}
    for field in ('frequency', 'length', 'wire_diameter', 'reference_impedance'):
        if field in doc:
            overrides[field] = doc[field]
    if 'feed_point' in doc:
        overrides['feed_position'] = doc['feed_point'] / 100.0
    if 'balun_ratio' in doc:
        overrides['matching_network'] = doc['balun_ratio']

    design = dataclasses.replace(base, **overrides)
    logger.debug("Parsed design: %s", design)
    return design


def design_to_dict(design: AntennaDesign) -> Dict[str, Any]:
    """Inverse of design_from_dict, using the file field names."""
    return {
        'frequency': design.frequency,
        'length': design.length,
        'feed_point': design.feed_position * 100.0,
        'wire_diameter': design.wire_diameter,
        'balun_ratio': design.matching_network,
        'reference_impedance': design.reference_impedance,
    }


def parse_design(yaml_file: str) -> AntennaDesign:
    """
    Parse a YAML design file.

    Args:
        yaml_file: Path to the design file. The design may sit at the top level
            or under a ``design:`` key.

    Raises:
        DesignValidationError: On YAML or schema errors.
    """
    with open(yaml_file, 'r') as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise DesignValidationError(f"Invalid YAML in {yaml_file}: {e}") from e
    if isinstance(data, dict) and 'design' in data:
        data = data['design']
    return design_from_dict(data)


def dump_design(design: AntennaDesign, yaml_file: Optional[str] = None) -> str:
    """Serialise a design to YAML; also write it to *yaml_file* when given."""
    text = yaml.safe_dump({'design': design_to_dict(design)}, sort_keys=False)
    if yaml_file:
        with open(yaml_file, 'w') as f:
            f.write(text)
    return text


def parse_sweep_config(yaml_file: str) -> Dict[str, Any]:
    """
    Parse and validate a sweep configuration YAML file.
    """
    with open(yaml_file, 'r') as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise SweepConfigError(f"Invalid YAML in {yaml_file}: {e}") from e
    return validate_sweep_config(data)


def validate_sweep_config(data: Any) -> Dict[str, Any]:
    """
    Validate a sweep configuration and check every axis against SWEEP_LIMITS.

    Raises:
        SweepConfigError: On schema errors, a missing axis definition, values
            outside the parameter's limits, or a log axis that is not positive.
    """
    doc = validate_schema(data, SWEEP_SCHEMA, error_cls=SweepConfigError)
    for entry in doc['sweep']:
        param = entry['param']
        if 'range' not in entry and 'values' not in entry:
            raise SweepConfigError(f"Sweep entry for '{param}' needs 'range' or 'values'.")
        points = entry['range'] if 'range' in entry else entry['values']
        lo, hi = SWEEP_LIMITS[param]
        outside = [v for v in points if not lo <= v <= hi]
        if outside:
            raise SweepConfigError(
                f"Sweep values for '{param}' outside [{lo:g}, {hi:g}]: {outside}")
        if entry.get('scale') == 'log' and min(entry['range']) <= 0:
            raise SweepConfigError(f"Log sweep of '{param}' needs a positive range.")
    return doc
