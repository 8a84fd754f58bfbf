import logging

from fastapi import APIRouter, Depends, HTTPException

from travel_agency.api import get_registry
from travel_agency.core.config import settings
from travel_agency.models.schemas import CommandBatch, CommandReport
from travel_agency.services.command_service import process_lines
from travel_agency.storage.registry import TravelRegistry

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=CommandReport)
def run_commands(
    batch: CommandBatch,
    registry: TravelRegistry = Depends(get_registry),
) -> CommandReport:
    if len(batch.commands) > settings.max_batch_commands:
        raise HTTPException(
            status_code=413,
            detail=f"Batch exceeds {settings.max_batch_commands} commands",
        )
    results = process_lines(batch.commands, registry=registry)
    logger.info("Processed batch of %d lines into %d results", len(batch.commands), len(results))
    return CommandReport.from_results(results)
