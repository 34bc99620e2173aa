import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from career_reimagined.api.v1.session import router as session_router
from career_reimagined.core.config import settings
from career_reimagined.wiring.dependencies import build_session

class ContextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        extras = []
        for key in ("career", "subject", "policy", "fictional", "careers", "failed", "epoch", "pages", "reason", "reply_text"):
            value = getattr(record, key, None)
            if value not in (None, ""):
                extras.append(f"{key}={value}")
        base = super().format(record)
        if extras:
            return f"{base} | " + " ".join(extras)
        return base


handler = logging.StreamHandler()
handler.setFormatter(ContextFormatter("%(levelname)s:%(name)s:%(message)s"))

root = logging.getLogger()
root.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
root.handlers.clear()
root.addHandler(handler)


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.session = build_session()
    yield
    app.state.session.reset()


app = FastAPI(title="Career Reimagined", version="1.0.0", lifespan=lifespan)

app.include_router(session_router, prefix="/api/v1/session", tags=["session"])


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
