"""
JSON Schema checks for task files.

Schemas live in ganttline/schemas as <name>.schema.json. A failed check
raises ValidationError naming the schema and the offending location;
the CLI prints it and exits with status 2.
"""

import json
from functools import lru_cache
from pathlib import Path

from jsonschema.exceptions import best_match
from jsonschema.validators import validator_for

SCHEMAS_DIR = Path(__file__).resolve().parent.parent / "schemas"


class ValidationError(Exception):
    """Input could not be read or did not match its schema."""

    def __init__(self, schema_name: str, message: str, path: str = None):
        self.schema_name = schema_name
        self.message = message
        self.path = path
        location = f" at {path}" if path else ""
        super().__init__(f"[{schema_name}] {message}{location}")


@lru_cache(maxsize=None)
def get_validator(schema_name: str):
    """Validator for a bundled schema, built once per process."""
    schema_path = SCHEMAS_DIR / f"{schema_name}.schema.json"
    if not schema_path.exists():
        raise ValidationError(schema_name, f"No schema at {schema_path}")
    schema = json.loads(schema_path.read_text())
    validator_cls = validator_for(schema)
    validator_cls.check_schema(schema)
    return validator_cls(schema)


def validate(data, schema_name: str) -> None:
    """
    Check decoded JSON against a bundled schema.

    Only the most relevant error is reported; for the task schema's
    list-or-page alternatives that is the error inside the branch that
    came closest to matching.

    Raises:
        ValidationError: If the data doesn't match
    """
    error = best_match(get_validator(schema_name).iter_errors(data))
    if error is None:
        return
    location = "/".join(str(p) for p in error.absolute_path) or "(root)"
    raise ValidationError(schema_name, error.message, location)


def read_json(path: Path, schema_name: str):
    """
    Read and decode a JSON file destined for `schema_name`.

    Raises:
        ValidationError: If the file is missing, unreadable or not JSON
    """
    try:
        text = path.read_text()
    except FileNotFoundError:
        raise ValidationError(schema_name, f"File not found: {path}") from None
    except OSError as e:
        raise ValidationError(schema_name, f"Could not read {path}: {e}") from None

    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ValidationError(schema_name, f"Invalid JSON in {path}: {e}") from None
