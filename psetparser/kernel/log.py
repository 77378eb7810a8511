import logging
from pathlib import Path
from typing import List, Union

USER = 'user'

user = {'audience': USER}


class AudienceFilter(logging.Filter):
    def __init__(self, audience, name=''):
        super().__init__(name)
        self.audience = audience

    def filter(self, record: logging.LogRecord) -> bool:
        audience = getattr(record, 'audience', None)
        return audience == self.audience


def get_user_logger(name):
    return logging.LoggerAdapter(logging.getLogger(name), user)


def get_quality_logger():
    """Logger for findings about the parsed documentation itself."""
    return logging.getLogger('psetparser.QualityReport')


def initial_logging_setup(level=logging.INFO):
    """Setup of the psetparser logger for command line usage.

    Adds a stream handler with the user formatter for messages tagged with
    the user audience and one with the dev formatter for all other messages.
    """
    general_logger = logging.getLogger('psetparser')
    general_logger.setLevel(level)

    user_stream_handler = logging.StreamHandler()
    user_stream_handler.setFormatter(user_formatter)
    user_stream_handler.addFilter(AudienceFilter(USER))
    general_logger.addHandler(user_stream_handler)

    dev_stream_handler = logging.StreamHandler()
    dev_stream_handler.setFormatter(dev_formatter)
    dev_stream_handler.addFilter(AudienceFilter(audience=None))
    general_logger.addHandler(dev_stream_handler)

    return general_logger


def report_logging_setup(log_path: Union[str, Path]) -> List[logging.Handler]:
    """Setup file logging for a parsing run.

    This creates the following:
    * the file psetparser.log where all logs of the run are stored
    * the file PsetQualityReport.log for the quality_logger, which keeps all
    information about problems found in the documentation pages. This logger
    is only on file to keep the console output clean.
    """
    log_path = Path(log_path)
    log_path.mkdir(parents=True, exist_ok=True)
    handlers = []

    general_logger = logging.getLogger('psetparser')
    general_log_file_handler = logging.FileHandler(
        log_path / 'psetparser.log')
    general_log_file_handler.setFormatter(file_formatter)
    general_logger.addHandler(general_log_file_handler)
    handlers.append(general_log_file_handler)

    quality_logger = get_quality_logger()
    # do not propagate messages to main logger to keep logs cleaner
    quality_logger.propagate = False
    quality_handler = logging.FileHandler(log_path / 'PsetQualityReport.log')
    quality_handler.setFormatter(quality_file_formatter)
    quality_logger.addHandler(quality_handler)
    handlers.append(quality_handler)

    return handlers


def teardown_loggers():
    """Closes and removes all handlers from loggers in the 'psetparser'
    hierarchy.

    Errors during file handler closure (e.g., due to already deleted log
    files) are ignored.
    """
    logger_dict = logging.Logger.manager.loggerDict

    for logger_name, logger_instance in logger_dict.items():
        if isinstance(logger_instance,
                      logging.Logger) and logger_name.startswith('psetparser'):
            for handler in logger_instance.handlers[:]:
                try:
                    handler.close()
                except (PermissionError, FileNotFoundError):
                    pass
                logger_instance.removeHandler(handler)


class CustomFormatter(logging.Formatter):
    """Custom logging design based on
    https://stackoverflow.com/questions/384076/how-can-i-color-python
    -logging-output"""

    def __init__(self, fmt):
        super().__init__()
        self._fmt = fmt

    def format(self, record):
        grey = "\x1b[37;20m"
        green = "\x1b[32;20m"
        yellow = "\x1b[33;20m"
        red = "\x1b[31;20m"
        bold_red = "\x1b[31;1m"
        reset = "\x1b[0m"

        FORMATS = {
            logging.DEBUG: grey + self._fmt + reset,
            logging.INFO: green + self._fmt + reset,
            logging.WARNING: yellow + self._fmt + reset,
            logging.ERROR: red + self._fmt + reset,
            logging.CRITICAL: bold_red + self._fmt + reset
        }
        log_fmt = FORMATS.get(record.levelno)
        formatter = logging.Formatter(log_fmt)
        return formatter.format(record)


user_formatter = CustomFormatter('[USER-%(levelname)s]:'
                                 ' %(message)s')
dev_formatter = CustomFormatter('[DEV-%(levelname)s] -'
                                ' %(asctime)s  %(name)s.%(funcName)s:'
                                ' %(message)s')
# plain formatters for files, colour codes only make sense on a terminal
file_formatter = logging.Formatter('[%(levelname)s] - %(asctime)s'
                                   '  %(name)s.%(funcName)s: %(message)s')
quality_file_formatter = logging.Formatter('[QUALITY-%(levelname)s]'
                                           ' %(name)s: %(message)s')
