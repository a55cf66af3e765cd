from fastapi import (
    FastAPI,
    Request,
    Form,
    APIRouter,
    HTTPException,
    Response,
)
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from datetime import date as _date
from typing import Optional
import logging

from pydantic import ValidationError

from lumpsum.domain.Month import Month
from lumpsum.domain.MonthlyResult import Activity
from lumpsum.infra.Session_Store import SessionStore
from lumpsum.infra.pdf_utils import generate_pdf_for_schedule
from lumpsum.logic.calendar.engine import (
    easter_sunday,
    last_working_day_of_month,
    swiss_holidays,
    weeks_of_month,
    working_days_in_month,
)
from lumpsum.logic.formatting.labels import (
    format_currency,
    format_date_dmy,
    format_month_label,
    format_week_label,
)
from lumpsum.logic.scheduling.builder import build_schedule
from lumpsum.utilities.config import DEFAULT_RATE, MAX_DURATION_MONTHS, SESSION_COOKIE, TEMPLATES_DIR
from lumpsum.utilities.constants import MONTH_INPUT_FORMAT
from lumpsum.utilities.export import csv_filename, milestone_label, schedule_to_csv
from lumpsum.utilities.validators import DeliverablesUpdate, ScheduleRequest, WorkPlanUpdate

# Logging
logger = logging.getLogger("lumpsum_app")

# Initialize FastAPI app
app = FastAPI(title="Swiss Lump-Sum Planner API")
router = APIRouter(prefix="/api")

# Templates
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.filters["currency"] = format_currency
templates.env.filters["dmy"] = format_date_dmy
templates.env.filters["week_label"] = format_week_label

ERROR_MESSAGES = {
    "invalid": "Please enter a positive rate, a start month (YYYY-MM) and a duration between 1 and "
               f"{MAX_DURATION_MONTHS} months.",
    "range": "The schedule reaches beyond the supported calendar range.",
}

# One store per process, handed to every handler explicitly
store = SessionStore()


def get_store() -> SessionStore:
    return store


# -------------------- Helpers --------------------
def _calculate(payload: ScheduleRequest, session_store: SessionStore, session_id: Optional[str]) -> str:
    """Build the schedule for the request and store it; returns the session id used."""
    year, month = payload.start_year_month
    try:
        schedule = build_schedule(payload.rate, year, month, payload.duration)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    session_id = session_id or session_store.new_session_id()
    session_store.put(session_id, schedule)
    return session_id


def _get_schedule(session_store: SessionStore, session_id: str):
    try:
        return session_store.get(session_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Session not found")


def _update_month(index: int, update):
    try:
        return update()
    except KeyError:
        raise HTTPException(status_code=404, detail="Session not found")
    except IndexError:
        raise HTTPException(status_code=404, detail=f"Month {index} not found")
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


def _engine_call(fn, *args):
    """Run an engine function, mapping precondition violations to 400."""
    try:
        return fn(*args)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


# -------------------- UI PAGES --------------------
@app.get("/", response_class=HTMLResponse)
def main_page(request: Request, error: Optional[str] = None):
    session_store = get_store()
    session_id = request.cookies.get(SESSION_COOKIE)
    schedule = session_store.find(session_id)
    start_month = _date.today().strftime(MONTH_INPUT_FORMAT)
    milestones = []
    if schedule is not None:
        start_month = f"{schedule.start_year}-{int(schedule.start_month):02d}"
        milestones = [milestone_label(i, r.month_label) for i, r in enumerate(schedule.results, start=1)]
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "schedule": schedule,
            "milestones": milestones,
            "start_month": start_month,
            "default_rate": schedule.rate if schedule is not None else DEFAULT_RATE,
            "max_duration": MAX_DURATION_MONTHS,
            "session_id": session_id,
            "error_message": ERROR_MESSAGES.get(error) if error else None,
        }
    )


@app.post("/calculate")
def calculate(
    request: Request,
    rate: str = Form(...),
    start_month: str = Form(...),
    duration: str = Form(...)
):
    try:
        payload = ScheduleRequest(rate=rate, start_month=start_month, duration=duration)
    except ValidationError as e:
        logger.info("Rejected form input: %s", e.errors())
        return RedirectResponse(url="/?error=invalid", status_code=303)
    try:
        session_id = _calculate(payload, get_store(), request.cookies.get(SESSION_COOKIE))
    except HTTPException:
        return RedirectResponse(url="/?error=range", status_code=303)
    response = RedirectResponse(url="/", status_code=303)
    response.set_cookie(SESSION_COOKIE, session_id, httponly=True, samesite="lax")
    return response


@app.post("/months/{index}")
async def update_month_form(request: Request, index: int):
    """Save deliverables and all work-plan cells of one month from the HTML form."""
    session_store = get_store()
    session_id = request.cookies.get(SESSION_COOKIE) or ""
    form = await request.form()

    def update():
        result = session_store.update_deliverables(session_id, index, form.get("deliverables", ""))
        for week in result.weeks:
            for activity in Activity:
                field = f"{activity.value}_{week.index}"
                if field in form:
                    session_store.update_work_plan(session_id, index, week.index, activity, form.get(field))
        return result

    _update_month(index, update)
    return RedirectResponse(url=f"/#month-{index}", status_code=303)


# -------------------- API: Schedule --------------------
@router.post("/schedule")
def api_create_schedule(payload: ScheduleRequest):
    session_store = get_store()
    session_id = _calculate(payload, session_store, payload.session_id)
    return {"session_id": session_id, "schedule": session_store.get(session_id).to_dict()}


@router.get("/schedule/{session_id}")
def api_get_schedule(session_id: str):
    return _get_schedule(get_store(), session_id).to_dict()


@router.delete("/schedule/{session_id}")
def api_drop_schedule(session_id: str):
    if not get_store().drop(session_id):
        raise HTTPException(status_code=404, detail="Session not found")
    return {"success": True}


@router.put("/schedule/{session_id}/months/{index}/deliverables")
def api_update_deliverables(session_id: str, index: int, payload: DeliverablesUpdate):
    session_store = get_store()
    result = _update_month(index, lambda: session_store.update_deliverables(session_id, index, payload.text))
    return result.to_dict()


@router.put("/schedule/{session_id}/months/{index}/work-plan/{week}")
def api_update_work_plan(session_id: str, index: int, week: int, payload: WorkPlanUpdate):
    session_store = get_store()
    result = _update_month(
        index, lambda: session_store.update_work_plan(session_id, index, week, payload.activity, payload.text)
    )
    return result.to_dict()


@router.get("/schedule/{session_id}/export.csv")
def export_csv(session_id: str):
    schedule = _get_schedule(get_store(), session_id)
    logger.info("CSV export for session %s", session_id)
    return Response(
        content=schedule_to_csv(schedule),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{csv_filename(schedule)}"'},
    )


@router.get("/schedule/{session_id}/export.pdf")
def export_pdf(session_id: str):
    schedule = _get_schedule(get_store(), session_id)
    logger.info("PDF export for session %s", session_id)
    filename = csv_filename(schedule).replace(".csv", ".pdf")
    return Response(
        content=generate_pdf_for_schedule(schedule),
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


# -------------------- API: Calendar facts --------------------
@router.get("/holidays/{year}")
def api_holidays(year: int):
    holidays = _engine_call(swiss_holidays, year)
    return {"year": year, "count": len(holidays), "holidays": holidays.to_list()}


@router.get("/easter/{year}")
def api_easter(year: int):
    easter = _engine_call(easter_sunday, year)
    return {"year": year, "easter_sunday": easter.isoformat(), "label": format_date_dmy(easter)}


@router.get("/working-days/{year}/{month}")
def api_working_days(year: int, month: int):
    month = _engine_call(Month.coerce, month)
    working_days = _engine_call(working_days_in_month, year, month)
    milestone = _engine_call(last_working_day_of_month, year, month)
    return {
        "year": year,
        "month": int(month),
        "month_label": format_month_label(year, month),
        "working_days": working_days,
        "milestone_date": format_date_dmy(milestone),
        "weeks": [w.to_dict() for w in _engine_call(weeks_of_month, year, month)],
    }


# Register router
app.include_router(router)
