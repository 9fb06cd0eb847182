"""
Pytest fixtures for photographic report tests.
"""
import os
import tempfile

import pytest

# Set test environment before importing config
os.environ['APP_STAGE'] = 'test'
os.environ['FLASK_ENV'] = 'testing'
os.environ['STORAGE_BACKEND'] = 'local'
os.environ['INSTANCE_DIR'] = tempfile.mkdtemp(prefix='report-tests-')
os.environ['FONTS_DIR'] = os.path.join(os.environ['INSTANCE_DIR'], 'no-fonts')
os.environ.pop('REPORTS_API_URL', None)
os.environ.pop('REPORT_DESCRIPTION_OVERFLOW', None)

from services.reporting.layout_config import LayoutConfig  # noqa: E402
from tests.factories import make_image, PORTRAIT, LANDSCAPE, SQUARE  # noqa: E402


@pytest.fixture
def config():
    """Default A4 layout with the built-in Helvetica fonts."""
    return LayoutConfig()


@pytest.fixture
def portrait_image():
    return make_image(*PORTRAIT, name='portrait')


@pytest.fixture
def landscape_image():
    return make_image(*LANDSCAPE, name='landscape')


@pytest.fixture
def square_image():
    return make_image(*SQUARE, name='square')


@pytest.fixture
def background_image():
    """3:1 artwork, far wider than the page."""
    return make_image(300, 100, name='background', color=(240, 240, 255))


@pytest.fixture
def cursor_after_fields(config):
    """Cursor where the first photo starts on a report with no logo and one-line fields."""
    from services.reporting.document import Document
    from services.reporting.fields import draw_fields
    from services.reporting.header import draw_header
    from tests.factories import make_report

    document = Document(page_width=config.page_width, page_height=config.page_height)
    document.add_page()
    report = make_report()
    cursor = draw_header(document, report, config)
    return draw_fields(document, report, config, cursor)


@pytest.fixture
def client():
    from app import create_app
    app = create_app({'TESTING': True})
    with app.test_client() as client:
        yield client
