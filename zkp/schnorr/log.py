"""
로깅 설정
==========

zkp.schnorr 의 각 모듈은 logging.getLogger(__name__) 로거를 사용한다.
라이브러리 자체는 핸들러를 설치하지 않으며, 애플리케이션이
configure_logging() 을 한 번 호출해 포맷과 레벨을 정한다.

비밀 스칼라(위트니스, 난수)는 로그에 남기지 않는다.
"""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

logger = logging.getLogger("zkp.schnorr")


def configure_logging(level=logging.INFO):
    """zkp.schnorr 로거에 스트림 핸들러를 설치한다 (중복 설치하지 않음)."""
    if not any(getattr(h, "_schnorr", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._schnorr = True
        logger.addHandler(handler)
    logger.setLevel(level)
    return logger
