# logging: 요청/응답 로깅 미들웨어
# 모든 HTTP 요청과 응답에 로그를 남긴다.

import logging
import time
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from core.config import settings

# 로거 설정
logger = logging.getLogger("api")
logger.setLevel(settings.LOG_LEVEL.upper())

# 콘솔 핸들러 추가 (없는 경우)
if not logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )
    logger.addHandler(handler)


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    요청/응답 로깅 미들웨어

    HTTP 요청의 메소드, 경로, 상태 코드, 처리 시간을 로그로 남기고,
    토큰 인증을 통과한 요청이면 사용자 ID도 함께 남긴다.
    """

    async def dispatch(self, request: Request, call_next):
        start_time = time.time()

        logger.info(f"-> {request.method} {request.url.path}")

        response = await call_next(request)

        process_time = time.time() - start_time

        # verify_user_token이 성공한 경우에만 설정됨
        user_id = getattr(request.state, "user_id", None)
        user_part = f" - User: {user_id}" if user_id is not None else ""

        logger.info(
            f"<- {request.method} {request.url.path} - "
            f"Status: {response.status_code} - "
            f"Time: {process_time:.3f}s{user_part}"
        )

        return response
