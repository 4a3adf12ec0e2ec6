import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

# Load environment variables early (OpenAI key, chunk size, etc.)
load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="Earnings Call Transcript Cleaner", version="1.0.0")

# --- CORS -----------------------------------------------------------------
ALLOWED_ORIGINS = [
    o.strip()
    for o in os.getenv(
        "ALLOWED_ORIGINS",
        "http://localhost:3000,http://localhost:8501,http://127.0.0.1:3000,http://127.0.0.1:8501",
    ).split(",")
    if o.strip()
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)


@app.get("/")
def home():
    return {"message": "Transcript cleaner API is running. Try /health or /docs"}


@app.get("/health")
def health():
    return {"ok": True}


# --- Routers --------------------------------------------------------------
from transcript_cleaner.routes import passes, process


app.include_router(process.router, prefix="/api", tags=["process"])
app.include_router(passes.router, prefix="/api", tags=["passes"])
