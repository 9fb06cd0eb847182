"""
Report payload loading.

Builds a ReportDocument from the saved-report JSON format:

    {
      "general": {"tipus", "numero", "data", "hora", "adreca", "assumpte",
                  "signants", "escut", "backgroundImage", "signatureImage"},
      "photos": [{"foto", "titol", "descripcio", "number", "isActive"}]
    }

English keys (type, case_number, ..., image, title, description, is_active)
are accepted as aliases, as is the legacy {"formData", "fotos": {...}} layout.
Images are base64 data URLs.
"""
import logging

from services.reporting.errors import ReportLoadError
from services.reporting.models import PhotoEntry, ReportDocument
from utils.image_processing import ImageDecodeError, ReportImage

logger = logging.getLogger(__name__)

FIELD_ALIASES = {
    'type': ('type', 'tipus'),
    'case_number': ('case_number', 'numero'),
    'date': ('date', 'data'),
    'time': ('time', 'hora'),
    'address': ('address', 'adreca'),
    'subject': ('subject', 'assumpte'),
    'signatories': ('signatories', 'signants'),
}

IMAGE_ALIASES = {
    'header_logo': ('logo', 'header_logo', 'escut'),
    'background_image': ('background_image', 'backgroundImage'),
    'signature_image': ('signature_image', 'signatureImage'),
}

# Transient UI fields that are never part of a rendered report
DROPPED_FIELDS = ('dia',)


def _first(mapping, keys, default=None):
    for key in keys:
        value = mapping.get(key)
        if value not in (None, ''):
            return value
    return default


def _image_from_value(value, name):
    """Decode a data URL into a ReportImage; None (with a warning) on bad data."""
    if not value:
        return None
    if isinstance(value, ReportImage):
        return value
    if isinstance(value, (bytes, bytearray)):
        return ReportImage(bytes(value), name=name)
    try:
        return ReportImage.from_data_url(str(value), name=name)
    except ImageDecodeError as e:
        logger.warning(f"[Loader] Ignoring invalid image data for {name}: {e}")
        return None


def convert_legacy_format(data):
    """Convert {"formData": {...}, "fotos": {...}} into the current layout."""
    logger.warning("[Loader] Legacy report format detected; converting")
    fotos = data.get('fotos') or {}
    photos = [dict(value) for _, value in sorted(fotos.items(), key=lambda kv: _sort_key(kv[0]))
              if isinstance(value, dict)]
    return {'general': dict(data.get('formData') or {}), 'photos': photos}


def _sort_key(key):
    try:
        return (0, int(key))
    except (TypeError, ValueError):
        return (1, str(key))


def _sequence_number(raw, index):
    try:
        return int(_first(raw, ('number', 'sequence_number'), default=index + 1))
    except (TypeError, ValueError):
        return index + 1


def is_legacy_format(data) -> bool:
    return isinstance(data, dict) and 'formData' in data and isinstance(data.get('fotos'), dict)


def load_report(data) -> ReportDocument:
    """
    Build a ReportDocument from a decoded JSON payload.

    Photos without usable image data are skipped with a warning.

    Raises:
        ReportLoadError: If the payload is not a report object.
    """
    if not isinstance(data, dict):
        raise ReportLoadError("Report payload must be a JSON object")

    if is_legacy_format(data):
        data = convert_legacy_format(data)

    general = data.get('general', data.get('fields')) or {}
    if not isinstance(general, dict):
        raise ReportLoadError("'general' must be an object")
    general = {k: v for k, v in general.items() if k not in DROPPED_FIELDS}

    raw_photos = data.get('photos') or []
    if not isinstance(raw_photos, list):
        raise ReportLoadError("'photos' must be a list")

    fields = {}
    for key, aliases in FIELD_ALIASES.items():
        value = _first(general, aliases, default='')
        fields[key] = str(value).strip()

    images = {
        attr: _image_from_value(_first(general, aliases), attr)
        for attr, aliases in IMAGE_ALIASES.items()
    }

    photos = []
    for index, raw in enumerate(raw_photos):
        if not isinstance(raw, dict):
            logger.warning(f"[Loader] Photo at index {index} is not an object; skipping")
            continue
        image = _image_from_value(_first(raw, ('image', 'foto')), f"photo_{index + 1}")
        if image is None:
            logger.warning(f"[Loader] Photo at index {index} has no valid image data; skipping")
            continue

        is_active = raw.get('is_active', raw.get('isActive', True))
        photos.append(PhotoEntry(
            sequence_number=_sequence_number(raw, index),
            title=str(_first(raw, ('title', 'titol'), default='')),
            description=str(_first(raw, ('description', 'descripcio'), default='')),
            image=image,
            is_active=is_active is not False,
        ))

    return ReportDocument(fields=fields, photos=tuple(photos), **images)

