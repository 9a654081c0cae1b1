"""로깅 설정

stdlib logging. 각 모듈은 get_logger(__name__)로 로거를 받는다.
"""

import logging

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"

# 요청/틱마다 찍히면 시끄러운 외부 로거
_NOISY_LOGGERS = ("sqlalchemy.engine", "httpx")


def setup_logging(level: str = "INFO"):
    resolved = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=resolved,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    if resolved > logging.DEBUG:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
