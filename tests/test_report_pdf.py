"""
End-to-end PDF output: rendered text, page geometry, the HTTP route and the CLI.

PDFs are inspected with PyMuPDF.
"""
import io
import json
from unittest.mock import MagicMock, patch

import fitz  # PyMuPDF
import pytest
from PIL import Image, ImageDraw

from services.reporting.engine import generate_report_pdf, layout
from services.reporting.errors import ReportGenerationError
from services.reporting.layout_config import LayoutConfig
from tests.factories import LANDSCAPE, PORTRAIT, PhotoFactory, make_image, make_report, report_payload
from utils.geometry import mm_to_pt
from utils.image_processing import ReportImage


def _open(pdf_bytes):
    return fitz.open(stream=pdf_bytes, filetype="pdf")


def _text(doc):
    return "\n".join(page.get_text() for page in doc)


def test_single_page_report_text():
    report = make_report([PhotoFactory.portrait(title='Entrance', description='Cracked step')],
                         signature_image=make_image(140, 30, color=(0, 0, 0)))
    doc = _open(generate_report_pdf(report, config=LayoutConfig()))

    assert doc.page_count == 1
    text = _text(doc)
    for expected in ("Photographic Report", "Case number:", "A-123", "Photo 1:", "Entrance",
                     "Signatures:", "Page 1 of 1"):
        assert expected in text


def test_page_is_a4():
    doc = _open(generate_report_pdf(make_report([]), config=LayoutConfig()))
    rect = doc[0].rect
    assert rect.width == pytest.approx(595.28, abs=0.5)
    assert rect.height == pytest.approx(841.89, abs=0.5)


def test_multi_page_footers():
    photos = [PhotoFactory.landscape(), PhotoFactory.portrait(), PhotoFactory.landscape()]
    doc = _open(generate_report_pdf(make_report(photos), config=LayoutConfig()))

    total = doc.page_count
    assert total == 3
    for i, page in enumerate(doc, start=1):
        assert f"Page {i} of {total}" in page.get_text()


def test_photo_images_embedded():
    photos = [PhotoFactory.landscape(), PhotoFactory.landscape()]
    doc = _open(generate_report_pdf(make_report(photos), config=LayoutConfig()))
    assert sum(len(page.get_images()) for page in doc) >= 2


def _pixel_at_mm(page, x_mm, y_mm):
    """RGB of the rendered page at a point given in mm from the top-left."""
    pixmap = page.get_pixmap()
    return pixmap.pixel(int(mm_to_pt(x_mm)), int(mm_to_pt(y_mm)))


def _rgba_png(width, height, opaque_width=0, color=(255, 0, 0, 255)):
    image = Image.new('RGBA', (width, height), (0, 0, 0, 0))
    if opaque_width:
        ImageDraw.Draw(image).rectangle([0, 0, opaque_width - 1, height - 1], fill=color)
    buf = io.BytesIO()
    image.save(buf, format='PNG')
    return buf.getvalue()


def test_transparent_background_keeps_page_white():
    background = ReportImage(_rgba_png(210, 297, opaque_width=52), name='background')
    doc = _open(generate_report_pdf(make_report([], background_image=background), config=LayoutConfig()))
    page = doc[0]

    assert _pixel_at_mm(page, 190, 250) == (255, 255, 255)
    red, green, blue = _pixel_at_mm(page, 10, 250)
    assert red > 200 and green < 60 and blue < 60


def test_transparent_photo_keeps_block_white():
    photo = PhotoFactory.create(image=ReportImage(_rgba_png(160, 90), name='clear'))
    report = make_report([photo])
    box = layout(report, LayoutConfig()).blocks[0].image_box

    doc = _open(generate_report_pdf(report, config=LayoutConfig()))
    center = _pixel_at_mm(doc[0], box.x + box.width / 2, box.y + box.height / 2)

    assert center == (255, 255, 255)


def test_render_is_repeatable():
    photos = [PhotoFactory.landscape(description='Detail ' * 50), PhotoFactory.portrait()]
    report = make_report(photos)

    first = _open(generate_report_pdf(report, config=LayoutConfig()))
    second = _open(generate_report_pdf(report, config=LayoutConfig()))

    assert first.page_count == second.page_count
    assert _text(first) == _text(second)


class TestReportRoute:
    def test_ping(self, client):
        response = client.get('/ping')
        assert response.status_code == 200
        assert response.get_json() == {'status': 'ok'}

    def test_returns_pdf_download(self, client):
        response = client.post('/api/reports/pdf', json=report_payload(photo_sizes=(LANDSCAPE, PORTRAIT)))

        assert response.status_code == 200
        assert response.mimetype == 'application/pdf'
        disposition = response.headers['Content-Disposition']
        assert 'attachment' in disposition
        assert 'Photographic_report_A-123_' in disposition
        assert _open(response.data).page_count >= 1
        assert 'X-Report-Id' not in response.headers

    def test_request_id_echoed(self, client):
        response = client.get('/ping', headers={'X-Request-Id': 'abc-123'})
        assert response.headers['X-Request-Id'] == 'abc-123'

    def test_rejects_non_json(self, client):
        response = client.post('/api/reports/pdf', data='not json', content_type='application/json')
        assert response.status_code == 400
        assert 'error' in response.get_json()

    def test_rejects_non_object_report(self, client):
        response = client.post('/api/reports/pdf', json=[1, 2, 3])
        assert response.status_code == 400

    def test_generation_failure_is_500(self, client):
        with patch('services.reports.generate_report_pdf', side_effect=ReportGenerationError('boom')):
            response = client.post('/api/reports/pdf', json=report_payload())

        assert response.status_code == 500
        assert response.get_json() == {'error': 'Error generating the PDF'}

    def test_save_flag_reports_id(self, client):
        api = MagicMock()
        api.create_report.return_value = 12
        with patch('services.reports.ReportsApiClient.from_config', return_value=api):
            response = client.post('/api/reports/pdf?save=1', json=report_payload())

        assert response.status_code == 200
        assert response.headers['X-Report-Id'] == '12'


class TestRenderReportScript:
    def test_writes_pdf(self, tmp_path):
        from scripts.render_report import main

        source = tmp_path / 'report.json'
        source.write_text(json.dumps(report_payload()), encoding='utf-8')
        output = tmp_path / 'out.pdf'

        with patch('scripts.render_report.configure_logging'):
            assert main([str(source), '-o', str(output)]) == 0

        assert _open(output.read_bytes()).page_count == 1

    def test_unreadable_input(self, tmp_path):
        from scripts.render_report import main

        with patch('scripts.render_report.configure_logging'):
            assert main([str(tmp_path / 'missing.json')]) == 2
