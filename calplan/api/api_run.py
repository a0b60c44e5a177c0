from typing import Optional
import logging

from fastapi import FastAPI, Query

from calplan.events.web_observers import start as start_event_observers, get_events as get_web_events
from calplan.infra.autosave import AutosaveController
from calplan.infra.KeyValue_Store import JsonFileKeyValueStore
from calplan.infra.paths import BACKUP_DIR, STORAGE_FILE
from calplan.infra.Plan_Repository import PlanRepository
from calplan.logic.plans.state import PlanState
from calplan.utilities import config
from calplan.utilities.backup import BackupManager
from calplan.utilities.export_import import PlanImporter

# Routers
from calplan.api.routes import plans, transfer

# Logging
logger = logging.getLogger("calplan_app")

# Initialize FastAPI app
app = FastAPI(title="Calendar Day Planner API")
app.include_router(plans.router)
app.include_router(transfer.router)


def build_state(kv=None, storage_key: str = config.STORAGE_KEY, scheduler=None) -> PlanState:
    """Wire the key-value store, repository and autosave into a loaded PlanState."""
    kv = kv if kv is not None else JsonFileKeyValueStore(STORAGE_FILE)
    repository = PlanRepository(kv, storage_key)
    autosave = AutosaveController(
        repository,
        delay=config.AUTOSAVE_DELAY_MS / 1000,
        scheduler=scheduler,
        saved_display=config.SAVED_STATUS_SECONDS,
    )
    return PlanState.load(repository, autosave)


def install_state(target: FastAPI, state: PlanState, backup_dir=BACKUP_DIR) -> None:
    repository = state.autosave.repository
    backups = BackupManager(repository.kv, repository.key, backup_dir)
    target.state.plans = state
    target.state.importer = PlanImporter(state, backups)


@app.on_event("startup")
def _startup():
    """Load the stored plans and register notification observers."""
    start_event_observers()
    if getattr(app.state, "plans", None) is None:
        install_state(app, build_state())
    logger.info("Plan store ready (%d day plans)", len(app.state.plans.store))


@app.on_event("shutdown")
def _shutdown():
    """Write any pending autosave before exiting."""
    state = getattr(app.state, "plans", None)
    if state is not None and state.autosave is not None:
        state.autosave.flush()


# -------------------- API: Notifications (polled by frontend) --------------------
@app.get('/api/notifications')
def api_notifications(
    since: Optional[int] = Query(default=None, description="Return events with id greater than this value")
):
    """
    Return recent notices (failed saves, imports) and save status changes.

    Client polling strategy:
        1. First call without 'since' to load the current backlog.
        2. Store 'next_cursor' from response.
        3. Subsequent polls: /api/notifications?since=<next_cursor>
    """
    return get_web_events(since)
