from pathlib import Path
from typing import List, Union

from pydantic import TypeAdapter, ValidationError

from .errors import JourneyValidationError
from .log import log
from .models import Journey, JourneyStore

_JOURNEYS = TypeAdapter(List[Journey])


def parse_journeys(raw: Union[bytes, str]) -> JourneyStore:
    """Validate a JSON array of journey records into a store.

    Any malformed record rejects the whole batch.
    """
    try:
        journeys = _JOURNEYS.validate_json(raw, strict=True)
    except ValidationError as e:
        raise JourneyValidationError(e) from e
    return JourneyStore(journeys)


def load_journeys(path: Union[str, Path]) -> JourneyStore:
    """Load and validate journeys from a JSON file."""
    path = Path(path)
    log("load", f"Loading journeys from {path}")
    store = parse_journeys(path.read_bytes())
    log("load", f"Loaded {len(store)} journeys")
    return store
