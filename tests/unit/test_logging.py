from app.config import settings
from app.core.logger import logger, setup_logging


def test_log_lines_carry_request_id(tmp_path) -> None:
    setup_logging(str(tmp_path), debug=True)
    try:
        with logger.contextualize(request_id='req-42'):
            logger.info('inside a request')
        logger.error('outside a request')
    finally:
        # Closing the sinks flushes the files
        setup_logging(settings.log_dir, settings.debug)

    app_log = (tmp_path / 'snapscape.log').read_text()
    error_log = (tmp_path / 'error.log').read_text()

    assert '| req-42 |' in app_log
    assert 'inside a request' in app_log
    assert '| - |' in error_log
    assert 'inside a request' not in error_log


def test_request_id_header_is_echoed(client) -> None:
    r = client.get('/health', headers={'X-Request-ID': 'abc123'})
    assert r.headers['X-Request-ID'] == 'abc123'
