from typing import Dict, Any
import json
from pathlib import Path
from jsonschema import validate, ValidationError, SchemaError

from ..errors import EnumDefinitionError

SCHEMAS_DIR = Path(__file__).resolve().parent.parent / "schemas"

# Cache for loaded schemas
_SCHEMA_CACHE = {}

def load_schema(schema_path: Path) -> Dict[str, Any]:
    schema_key = str(schema_path)
    if schema_key in _SCHEMA_CACHE:
        return _SCHEMA_CACHE[schema_key]
    if not schema_path.exists():
        raise FileNotFoundError(f"Schema file not found: {schema_path}")
    with open(schema_path, 'r', encoding='utf-8') as f:
        schema = json.load(f)
        _SCHEMA_CACHE[schema_key] = schema
        return schema

def validate_definition(definition: Any, schema_path: Path, source_name: str) -> None:
    """
    Validate a definition document against a JSON schema.

    Raises:
        EnumDefinitionError: If the schema is broken or the document does not match it
    """
    schema = load_schema(schema_path)
    try:
        validate(instance=definition, schema=schema)
    except SchemaError as e:
        raise EnumDefinitionError(f"Invalid schema at '{schema_path}': {e.message}", table=source_name) from e
    except ValidationError as e:
        path = ' -> '.join(str(p) for p in e.path) if e.path else 'root'
        raise EnumDefinitionError(f"Validation failed at {path}: {e.message}", table=source_name) from e
