import logging

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from pydantic import BaseModel, Field

from latmap.core import build_heatmap
from latmap.errors import HeatmapError
from latmap.models import HeatmapConfig

logger = logging.getLogger(__name__)

app = FastAPI(title="latmap API", description="Render latency heat maps from two-column traces")

# Enable CORS for frontend integration
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


class HeatmapRequest(BaseModel):
    trace: str  # "<time> <latency>" rows, optional header line
    config: HeatmapConfig = Field(default_factory=HeatmapConfig)


@app.get("/api/health")
async def health():
    return {"ok": True}


@app.post("/api/heatmap")
def create_heatmap(request: HeatmapRequest):
    try:
        result = build_heatmap(request.trace.splitlines(), request.config)
    except HeatmapError as e:
        logger.error(f"Heat map rejected: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    return Response(content=result.svg, media_type="image/svg+xml")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
