"""JSON-compatible serialization of photocurator records and collection files.

Records are plain dataclasses, so encoding walks their fields and decoding
follows their type hints. Fingerprints encode as hex strings (bytes) or
lists (numeric vectors), enums as their values and datetimes as ISO 8601.
"""

import dataclasses
import json
import logging
import typing
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Type, TypeVar, Union

from photocurator.shared.exceptions import CollectionLoadError, PhotoCuratorError
from photocurator.shared.models import CurationResult, FaceObservation, Photo

logger = logging.getLogger(__name__)

T = TypeVar("T")

_NONE_TYPE = type(None)


def to_dict(record) -> Any:
    """Encode a record (or any nesting of records, tuples, lists and dicts) as JSON-compatible data."""
    if record is None or isinstance(record, (bool, int, float, str)):
        return record
    if isinstance(record, Enum):
        return record.value
    if isinstance(record, datetime):
        return record.isoformat()
    if isinstance(record, bytes):
        return record.hex()
    if isinstance(record, BaseException):
        return str(record)
    if dataclasses.is_dataclass(record) and not isinstance(record, type):
        return {f.name: to_dict(getattr(record, f.name)) for f in dataclasses.fields(record)}
    if isinstance(record, (list, tuple)):
        return [to_dict(item) for item in record]
    if isinstance(record, dict):
        return {str(key): to_dict(value) for key, value in record.items()}
    return repr(record)


def from_dict(cls: Type[T], data: Dict[str, Any]) -> T:
    """Decode a dict produced by ``to_dict`` back into a ``cls`` record.

    Keys that are not fields of ``cls`` are ignored; missing fields take
    their defaults.
    """
    hints = typing.get_type_hints(cls)
    kwargs = {}
    for f in dataclasses.fields(cls):
        if f.name in data:
            kwargs[f.name] = _decode(hints[f.name], data[f.name])
    return cls(**kwargs)


def _decode(tp, value):
    if value is None:
        return None

    origin = typing.get_origin(tp)
    args = typing.get_args(tp)

    if origin is Union:
        options = [a for a in args if a is not _NONE_TYPE]
        if bytes in options:
            # Fingerprint: hex string or numeric list
            if isinstance(value, str):
                return bytes.fromhex(value)
            return tuple(float(v) for v in value)
        if len(options) == 1:
            return _decode(options[0], value)
        return value
    if origin is tuple:
        if len(args) == 2 and args[1] is Ellipsis:
            return tuple(_decode(args[0], item) for item in value)
        return tuple(_decode(a, item) for a, item in zip(args, value))
    if origin is list:
        return [_decode(args[0], item) for item in value]
    if origin is dict:
        return {key: _decode(args[1], item) for key, item in value.items()}

    if tp is Any or tp is object:
        return value
    if isinstance(tp, type):
        if issubclass(tp, Enum):
            return tp(value)
        if issubclass(tp, datetime):
            return datetime.fromisoformat(value)
        if issubclass(tp, BaseException):
            return PhotoCuratorError(value)
        if dataclasses.is_dataclass(tp):
            return from_dict(tp, value)
        if tp is bytes:
            return bytes.fromhex(value)
        if tp in (int, float, str, bool):
            return tp(value)
    return value


# ---------------------------------------------------------------------------
# Collection files
# ---------------------------------------------------------------------------


@dataclass
class PhotoCollection:
    """Photos plus the detection and identity inputs loaded from a collection file."""
    photos: List[Photo]
    observations: Dict[str, List[FaceObservation]] = field(default_factory=dict)
    identities: Dict[str, List[Optional[str]]] = field(default_factory=dict)


def parse_collection(data: Dict[str, Any]) -> PhotoCollection:
    """
    Build a PhotoCollection from the JSON collection format.

    Each entry of ``photos`` holds the Photo fields plus an optional
    ``faces`` list of FaceObservation fields, each with an optional
    ``person_id``. Photos without a ``faces`` key have no detection input.
    """
    photos: List[Photo] = []
    observations: Dict[str, List[FaceObservation]] = {}
    identities: Dict[str, List[Optional[str]]] = {}

    for entry in data["photos"]:
        photo = from_dict(Photo, entry)
        photos.append(photo)

        if "faces" not in entry:
            continue
        faces = []
        person_ids = []
        for index, face in enumerate(entry["faces"]):
            face = dict(face)
            face.setdefault("face_index", index)
            faces.append(from_dict(FaceObservation, face))
            person_ids.append(face.get("person_id"))
        observations[photo.photo_id] = faces
        identities[photo.photo_id] = person_ids

    logger.debug(
        "Parsed collection: %d photos, %d with face input",
        len(photos), len(observations),
    )
    return PhotoCollection(photos=photos, observations=observations, identities=identities)


def load_collection(path: Union[str, Path]) -> PhotoCollection:
    """Read a collection JSON file. Raises CollectionLoadError on any read or parse failure."""
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise CollectionLoadError(str(path), str(e)) from e
    except json.JSONDecodeError as e:
        raise CollectionLoadError(str(path), f"invalid JSON: {e}") from e

    if not isinstance(data, dict) or not isinstance(data.get("photos"), list):
        raise CollectionLoadError(str(path), "expected an object with a 'photos' list")

    try:
        collection = parse_collection(data)
    except (KeyError, TypeError, ValueError) as e:
        raise CollectionLoadError(str(path), f"invalid photo entry: {e}") from e

    logger.info("Loaded %d photos from %s", len(collection.photos), path)
    return collection


def save_result(result: CurationResult, path: Union[str, Path]) -> Path:
    """Write a curation result as indented JSON, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(to_dict(result), f, indent=2)
    logger.info("Saved curation result to %s", path)
    return path
