import html
import logging

from fastapi import FastAPI, Response
from fastapi.responses import HTMLResponse
from diskstats_exporter.collector.main import metric_registry, provider, register
from diskstats_exporter.core.config import settings
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
import uvicorn
from fastapi.middleware.cors import CORSMiddleware

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="FastAPI + Prometheus Linux Disk Stats Exporter")


@app.get("/metrics")
def metrics():
    data = generate_latest(register)
    return Response(content=data, media_type=CONTENT_TYPE_LATEST)


@app.get("/metrics_html", response_class=HTMLResponse)
def metrics_html():
    provider.refresh()

    rows = ""
    for key, gauge in sorted(metric_registry.get_metrics().items()):
        rows += f"""
            <tr>
                <td>{html.escape(key)}</td>
                <td>{gauge.metric_type}</td>
                <td>{gauge.read()}</td>
            </tr>
        """

    page = f"""
    <html>
    <head>
        <meta charset="utf-8">
        <title>Disk Stats</title>
        <style>
            body {{ font-family: Arial, sans-serif; }}
            table {{ border-collapse: collapse; width: 100%; }}
            th, td {{ border: 1px solid #ddd; padding: 8px; }}
            th {{ background-color: #f4f4f4; text-align: left; }}
            td:last-child {{ text-align: right; }}
        </style>
    </head>
    <body>
        <h1>Disk Stats ({settings.DISKSTATS_PATH})</h1>
        <table>
            <tr>
                <th>Key</th>
                <th>Type</th>
                <th>Value</th>
            </tr>
            {rows}
        </table>
    </body>
    </html>
    """

    return HTMLResponse(content=page)


if settings.DEV:
    app.add_middleware(CORSMiddleware, allow_origins=["*"])

if __name__ == "__main__":
    logger.info("serving disk stats from %s on port %d", settings.DISKSTATS_PATH, settings.PORT)
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
