from fastapi import APIRouter, Depends, Query

from lcl_quote.dependencies import get_port_directory
from lcl_quote.ports.directory import Port
from lcl_quote.ports.search import MAX_RESULTS, search
from lcl_quote.schemas.port import PortOut, PortSearchResponse

router = APIRouter()


@router.get("", response_model=PortSearchResponse)
async def search_ports(
    q: str = Query("", description="Port name, UN/LOCODE or country"),
    limit: int = Query(MAX_RESULTS, ge=1, le=MAX_RESULTS),
    directory: tuple[Port, ...] = Depends(get_port_directory),
) -> PortSearchResponse:
    results = search(q, directory, limit=limit)
    return PortSearchResponse(
        query=q,
        results=[PortOut.model_validate(port) for port in results],
    )
