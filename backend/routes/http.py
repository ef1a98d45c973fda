from fastapi import APIRouter, Depends, Query
from intake_agent.agents.intake import IntakeSubmissionFlow
from intake_agent.config import get_services
from intake_agent.core import (
    DashboardResponse,
    IntakeDetailResponse,
    IntakeRequest,
    IntakeSubmissionResponse,
    StatusResponse,
)
from intake_agent.dashboard import build_dashboard_view, select_detail

router = APIRouter()


def get_intake_services():
    return get_services()


@router.get("/", response_model=StatusResponse)
def read_root():
    return {"status": "online", "system": "Clinexa Intake"}


@router.post("/intake", response_model=IntakeSubmissionResponse)
async def submit_intake(
    request: IntakeRequest, services: dict = Depends(get_intake_services)
):
    flow = IntakeSubmissionFlow(services["analysis"], services["store"])
    outcome = await flow.submit(request.symptoms)

    if outcome.status == "rejected":
        return {"success": False, "state": "idle", "data": {}, "error": None}
    if outcome.status == "failed":
        return {"success": False, "state": "failed", "data": {}, "error": outcome.error}
    return {"success": True, "state": "succeeded", "data": outcome.data(), "error": None}


@router.get("/dashboard", response_model=DashboardResponse)
def read_dashboard(
    q: str = Query(default="", description="Search by clinical id or summary text"),
    selected: str | None = Query(default=None, description="Intake id for the detail pane"),
    services: dict = Depends(get_intake_services),
):
    return build_dashboard_view(services["store"].records, term=q, selected_id=selected)


@router.get("/dashboard/intakes/{intake_id}", response_model=IntakeDetailResponse)
def read_intake_detail(intake_id: str, services: dict = Depends(get_intake_services)):
    record = select_detail(services["store"].records, intake_id)
    return {"intake": record.to_payload() if record is not None else None}
