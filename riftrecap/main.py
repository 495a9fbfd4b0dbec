import sys
from fastapi import FastAPI
from fastapi.responses import PlainTextResponse

from riftrecap.config import LOG_LEVEL, RANKED_QUEUES, RECAP_WINDOW_DAYS
from riftrecap.routes.recap import router as recap_router

print("[Startup] Python:", sys.executable)
print("[Startup] RANKED_QUEUES:", RANKED_QUEUES, "RECAP_WINDOW_DAYS:", RECAP_WINDOW_DAYS, "LOG_LEVEL:", LOG_LEVEL)
app = FastAPI(title = "Rift Rewind Recap")

#health check
@app.get("/api/health", response_class = PlainTextResponse)
async def health():
  return "ok"

#register API routes
app.include_router(recap_router)
