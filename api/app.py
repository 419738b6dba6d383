import logging
from typing import Optional

from fastapi import FastAPI, HTTPException

from models.errors import TimelogError, TimelogNotFoundError
from models.schema import Summary
from timelog import summarize_file
from utils.config import load_settings, resolve_log_path
from utils.helper import parse_timestamp

app = FastAPI(title="timelog")


@app.get("/summary", response_model=Summary)
def read_summary(now: Optional[str] = None):
    reference = None
    if now is not None:
        try:
            reference = parse_timestamp(now)
        except ValueError as exc:
            raise HTTPException(status_code=422, detail=str(exc))

    try:
        path = resolve_log_path(load_settings())
        return summarize_file(path, reference)
    except TimelogNotFoundError as exc:
        logging.warning(f"Summary requested but {exc}")
        raise HTTPException(status_code=404, detail=str(exc))
    except TimelogError as exc:
        logging.warning(f"Summary failed: {exc}")
        raise HTTPException(status_code=422, detail=str(exc))
