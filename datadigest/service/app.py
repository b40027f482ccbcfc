from fastapi import FastAPI, File, Form, UploadFile, HTTPException
from pydantic import BaseModel, Field, ValidationError
from typing import Optional, List
import json

from datadigest.explorer import assemble_codebook, build_payload, explorer
from datadigest.readers import frame_name, read_table

app = FastAPI(
    title="Codebook Explorer Builder",
    version="1.0.0",
    description="Build the codebook explorer payload from uploaded CSV or SAS files."
)

# ---------------- Models ----------------
class BuildOptions(BaseModel):
    names: Optional[List[str]] = Field(None, description="Display names, one per uploaded file (defaults to file stems)")
    demo: Optional[bool] = False
    add_env: Optional[bool] = Field(False, description="Echoed to rParams.addEnv; the service has no scope to scan")

# ---------------- API ----------------
@app.get("/v1/explorer:demo")
async def demo_payload():
    return explorer(demo=True, add_env=False, scope={}).x.to_wire()

@app.post("/v1/explorer:build")
async def build_explorer(payload: Optional[str] = Form(None), files: List[UploadFile] = File(None)):
    try:
        req = json.loads(payload) if payload else {}
    except json.JSONDecodeError:
        raise HTTPException(status_code=400, detail="Invalid JSON in 'payload'")

    try:
        opts = BuildOptions(**(req or {}))
    except (TypeError, ValidationError) as e:
        raise HTTPException(status_code=400, detail=f"Invalid options: {e}")

    if opts.demo:
        return explorer(demo=True, add_env=bool(opts.add_env), scope={}).x.to_wire()

    if not files:
        raise HTTPException(status_code=400, detail="No file provided")

    names = opts.names or []
    if names and len(names) != len(files):
        raise HTTPException(status_code=400, detail="'names' must have one entry per file")

    pairs = []
    for i, upload in enumerate(files):
        content = await upload.read()
        try:
            df = read_table(content, upload.filename or "")
        except Exception as e:
            raise HTTPException(status_code=400, detail=f"Unable to read {upload.filename}: {e}")
        name = names[i] if names else frame_name(upload.filename or "")
        pairs.append((name, df))

    entries = assemble_codebook(pairs)
    return build_payload(entries, add_env=bool(opts.add_env)).to_wire()
