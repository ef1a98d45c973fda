from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from intake_agent.config import get_services
from intake_agent.core.logging_utils import log_event

load_dotenv()


@asynccontextmanager
async def lifespan(app: FastAPI):
    log_event(component="app", event="startup")
    get_services()  # Load the store snapshot and build the analysis client
    yield
    log_event(component="app", event="shutdown")


def create_app() -> FastAPI:
    app = FastAPI(
        title="Clinexa Intake API",
        description="AI-Assisted Patient Intake and Clinician Dashboard",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # In production, specify the frontend origin
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    return app
