"""
Input validation utilities.

Wraps pydantic so every route reports schema failures the same way:
a list of ``{'field': ..., 'message': ...}`` issues.
"""

from typing import Any, Dict, List, Optional, Type
from urllib.parse import urlsplit
import logging

from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)


class ValidationResult:
    """Result of validating one input source against a schema"""

    def __init__(self, value: Optional[BaseModel] = None, issues: Optional[List[Dict[str, str]]] = None):
        self.value = value
        self.issues = issues or []

    @property
    def is_valid(self) -> bool:
        return not self.issues

    def __bool__(self):
        return self.is_valid


def format_issues(error: ValidationError, source: str) -> List[Dict[str, str]]:
    """
    Flatten a pydantic ValidationError into field-level issues.

    Args:
        error: The pydantic error
        source: Input source name, used when the error is not tied to a field

    Returns:
        List of {'field': dotted path, 'message': reason}
    """
    issues = []
    for item in error.errors():
        field = '.'.join(str(part) for part in item.get('loc', ())) or source
        issues.append({'field': field, 'message': item.get('msg', 'Invalid value')})
    return issues


def validate_input(schema: Type[BaseModel], data: Any, source: str) -> ValidationResult:
    """
    Validate untyped input against a schema.

    Args:
        schema: pydantic model class
        data: Raw input (mapping for query/params/body)
        source: 'params', 'query' or 'body'

    Returns:
        ValidationResult holding the model instance or the issues
    """
    if not isinstance(data, dict):
        return ValidationResult(issues=[{
            'field': source,
            'message': f"{source.capitalize()} must be a JSON object",
        }])

    try:
        return ValidationResult(value=schema.model_validate(data))
    except ValidationError as e:
        issues = format_issues(e, source)
        logger.debug(f"Validation failed for {source}: {issues}")
        return ValidationResult(issues=issues)


def check_url(value: str) -> str:
    """
    Pydantic-friendly check that a string is an absolute URL.

    Raises:
        ValueError: if the string has no scheme or no host
    """
    try:
        parts = urlsplit(value)
    except ValueError:
        raise ValueError('Invalid URL format')
    if not parts.scheme or not parts.netloc:
        raise ValueError('Invalid URL format')
    return value
