import logging
import sys

from pythonjsonlogger.orjson import OrjsonFormatter

LOG_FORMAT = '%(levelname)s %(asctime)s %(name)s %(message)s'


class LibraryJsonFormatter(OrjsonFormatter):
    """Formats each record as one JSON object.

    Adds ``severity`` and ``funcNameAndLine``. Context the client passes through
    ``extra`` (``method``, ``url``, ``status``, ``path``, ``container_id``,
    ``image_id``, ``tag``) ends up as top-level fields.
    """

    def __init__(self, fmt: str = LOG_FORMAT):
        super().__init__(fmt)

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)
        log_record['severity'] = record.levelname
        log_record['funcNameAndLine'] = f'{record.funcName}:{record.lineno}'


def configure_logging(level: int = logging.INFO):
    # stderr keeps structured command output on stdout parseable
    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setFormatter(LibraryJsonFormatter())

    logger = logging.getLogger('libraryclient')
    logger.handlers = [handler]
    logger.setLevel(level)
