# tests/test_logging.py

import json
import logging

from launchpad_indexer.core.logging import IndexerFormatter, IndexerLogger, LoggingMixin


def _record(**context):
    record = logging.makeLogRecord({'name': 'launchpad_indexer.test', 'levelno': logging.INFO,
                                    'levelname': 'INFO', 'msg': 'Checkpoint advanced'})
    for key, value in context.items():
        setattr(record, key, value)
    return record


def test_plain_format_appends_context():
    line = IndexerFormatter(include_context=True).format(_record(block_number=150))

    assert "INFO - Checkpoint advanced | block_number=150" in line


def test_structured_format_is_json():
    line = IndexerFormatter(include_context=True, structured=True).format(_record(block_number=150))

    entry = json.loads(line)
    assert entry['message'] == "Checkpoint advanced"
    assert entry['context'] == {'block_number': 150}


def test_loggers_live_under_package_root():
    assert IndexerLogger.get_logger('pipeline.runner').name == 'launchpad_indexer.pipeline.runner'

    class Worker(LoggingMixin):
        pass

    assert Worker().logger.name.startswith('launchpad_indexer.')
