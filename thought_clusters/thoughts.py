"""Thought records and the input boundary for clustering.

Raw records come from JSON or YAML exports (or any caller-supplied list of
dicts). Everything is validated here, once, so the clustering engine can
treat its input as well-formed.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable

import yaml

logger = logging.getLogger(__name__)


class ThoughtValidationError(ValueError):
    """Raised when thought records are malformed or exceed the size cap."""


@dataclass(frozen=True)
class ThoughtInput:
    """A single note to be clustered."""
    id: str
    text: str
    tags: tuple[str, ...] = field(default_factory=tuple)


def parse_thought(raw: Any, position: int = 0) -> ThoughtInput:
    """Parse one raw record into a ThoughtInput.

    Accepts either a ``text`` field or ``title``/``body`` fields, which are
    joined with a space.

    Raises:
        ThoughtValidationError: If the record is malformed.
    """
    if not isinstance(raw, dict):
        raise ThoughtValidationError(
            f"Thought #{position} must be a mapping, got {type(raw).__name__}"
        )

    thought_id = raw.get("id")
    if isinstance(thought_id, bool) or not isinstance(thought_id, (str, int)) or thought_id == "":
        raise ThoughtValidationError(f"Thought #{position} is missing a valid 'id'")

    if "text" in raw:
        text = raw["text"]
    else:
        text = f"{raw.get('title') or ''} {raw.get('body') or ''}".strip()
    if text is None:
        text = ""
    if not isinstance(text, str):
        raise ThoughtValidationError(f"Thought {thought_id!r} has non-string text")

    tags = raw.get("tags") or []
    if not isinstance(tags, (list, tuple)) or not all(isinstance(tag, str) for tag in tags):
        raise ThoughtValidationError(f"Thought {thought_id!r} tags must be a list of strings")

    return ThoughtInput(id=str(thought_id), text=text, tags=tuple(tags))


def validate_thoughts(records: Iterable[Any], max_thoughts: int | None = None) -> list[ThoughtInput]:
    """Parse and validate a batch of raw records.

    Args:
        records: Raw records (dicts) or ThoughtInput instances.
        max_thoughts: Reject batches larger than this. None disables the cap.

    Returns:
        List of ThoughtInput in input order.

    Raises:
        ThoughtValidationError: On malformed records, duplicate ids, or
            a batch exceeding max_thoughts.
    """
    thoughts = [
        record if isinstance(record, ThoughtInput) else parse_thought(record, i)
        for i, record in enumerate(records)
    ]

    if max_thoughts is not None and len(thoughts) > max_thoughts:
        raise ThoughtValidationError(
            f"Too many thoughts to cluster: {len(thoughts)} (limit {max_thoughts})"
        )

    seen: set[str] = set()
    for thought in thoughts:
        if thought.id in seen:
            raise ThoughtValidationError(f"Duplicate thought id: {thought.id!r}")
        seen.add(thought.id)

    logger.debug(f"[Thoughts] Validated {len(thoughts)} thoughts")
    return thoughts


def load_thoughts(path: str | Path, max_thoughts: int | None = None) -> list[ThoughtInput]:
    """Load thoughts from a JSON or YAML file.

    The file holds either a list of records or a mapping with a
    ``thoughts`` list.

    Raises:
        FileNotFoundError: If the file does not exist.
        ThoughtValidationError: If the content cannot be parsed or validated.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Thoughts file not found: {path}")

    content = path.read_text(encoding="utf-8")
    try:
        if path.suffix.lower() in (".yaml", ".yml"):
            data = yaml.safe_load(content)
        else:
            data = json.loads(content)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ThoughtValidationError(f"Could not parse {path}: {e}") from e

    if isinstance(data, dict):
        data = data.get("thoughts")
    if data is None:
        data = []
    if not isinstance(data, list):
        raise ThoughtValidationError(f"{path} must contain a list of thoughts")

    logger.info(f"[Thoughts] Loaded {len(data)} records from {path}")
    return validate_thoughts(data, max_thoughts=max_thoughts)
