import pytest

from services.reporting.errors import ReportLoadError
from services.reporting.report_loader import (
    convert_legacy_format,
    is_legacy_format,
    load_report,
)
from tests.factories import LANDSCAPE, PORTRAIT, data_url, report_payload


def test_loads_saved_report_format():
    report = load_report(report_payload(photo_sizes=(LANDSCAPE, PORTRAIT)))

    assert report.fields['type'] == 'Inspection'
    assert report.case_number == 'A-123'
    assert report.fields['date'] == '01/02/2024'
    assert report.fields['time'] == '10:30'
    assert [p.title for p in report.photos] == ['Title 1', 'Title 2']
    assert [p.sequence_number for p in report.photos] == [1, 2]
    assert report.photos[1].image.size == PORTRAIT


def test_accepts_english_keys():
    payload = {
        'general': {
            'case_number': 'B-7',
            'subject': 'Roof',
            'logo': data_url(20, 10),
            'signature_image': data_url(40, 10),
        },
        'photos': [{'image': data_url(*LANDSCAPE), 'title': 'Front', 'description': 'Door', 'is_active': False}],
    }
    report = load_report(payload)

    assert report.case_number == 'B-7'
    assert report.fields['subject'] == 'Roof'
    assert report.header_logo.size == (20, 10)
    assert report.signature_image.size == (40, 10)
    assert report.photos[0].description == 'Door'
    assert report.photos[0].is_active is False


def test_catalan_image_keys():
    payload = report_payload(escut=data_url(20, 10), backgroundImage=data_url(30, 10))
    report = load_report(payload)

    assert report.header_logo is not None
    assert report.background_image.size == (30, 10)
    assert report.signature_image is None


def test_missing_fields_default_to_empty():
    report = load_report({'general': {}, 'photos': []})
    assert report.fields['address'] == ''
    assert report.photos == ()


def test_photo_without_valid_image_skipped():
    payload = report_payload(photo_sizes=(LANDSCAPE, LANDSCAPE))
    payload['photos'][0]['foto'] = 'not-a-data-url'
    del payload['photos'][1]['foto']

    assert load_report(payload).photos == ()


def test_inactive_flag_only_false_disables():
    payload = report_payload(photo_sizes=(LANDSCAPE, LANDSCAPE, LANDSCAPE))
    payload['photos'][0]['isActive'] = False
    payload['photos'][1]['isActive'] = None
    del payload['photos'][2]['isActive']

    assert [p.is_active for p in load_report(payload).photos] == [False, True, True]


def test_transient_day_field_dropped():
    payload = report_payload(dia='dilluns')
    report = load_report(payload)
    assert 'dia' not in report.fields


def test_legacy_format_converted():
    legacy = {
        'formData': {'numero': 'L-1', 'tipus': 'Survey'},
        'fotos': {
            '2': {'foto': data_url(*LANDSCAPE), 'titol': 'second'},
            '1': {'foto': data_url(*LANDSCAPE), 'titol': 'first'},
        },
    }
    assert is_legacy_format(legacy)

    converted = convert_legacy_format(legacy)
    assert [p['titol'] for p in converted['photos']] == ['first', 'second']

    report = load_report(legacy)
    assert report.case_number == 'L-1'
    assert [p.title for p in report.photos] == ['first', 'second']


@pytest.mark.parametrize("payload", [
    [],
    "report",
    {'general': 'nope'},
    {'general': {}, 'photos': {'0': {}}},
])
def test_invalid_payloads_rejected(payload):
    with pytest.raises(ReportLoadError):
        load_report(payload)

