from fastapi import FastAPI

from doc_extract import __version__
from doc_extract.api.routes.extract import router as extract_router
from doc_extract.core.config import configure_logging


app = FastAPI(title="doc-extract-service", version=__version__)


@app.on_event("startup")
def on_startup():
    configure_logging()


app.include_router(extract_router)
