# timing: 요청 타이밍 미들웨어
# 각 요청에 타임스탬프를 주입하여 응답 envelope의 timestamp를 일관되게 만든다.

from datetime import datetime, timezone
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request


class TimingMiddleware(BaseHTTPMiddleware):
    """
    요청 타이밍 미들웨어

    요청이 들어올 때 UTC 시간을 request.state.request_time에 저장하고,
    처리 시간을 X-Process-Time 헤더로 돌려준다.
    """

    async def dispatch(self, request: Request, call_next):
        request.state.request_time = datetime.now(timezone.utc)

        response = await call_next(request)

        elapsed = datetime.now(timezone.utc) - request.state.request_time
        response.headers["X-Process-Time"] = f"{elapsed.total_seconds():.3f}"
        return response
