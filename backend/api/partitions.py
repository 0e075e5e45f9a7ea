from fastapi import APIRouter

from schemas.index import PartitionUnitResponse, PartitionVersesResponse
from utils.partitions import PartitionKind, get_partition

router = APIRouter(prefix="/partitions", tags=["partitions"])


@router.get("/{kind}", response_model=list[PartitionUnitResponse])
async def list_units(kind: PartitionKind):
    return [PartitionUnitResponse.from_unit(u) for u in get_partition(kind).units]


@router.get("/{kind}/{number}", response_model=PartitionUnitResponse)
async def get_unit(kind: PartitionKind, number: int):
    return PartitionUnitResponse.from_unit(get_partition(kind).get_unit(number))


@router.get("/{kind}/{number}/verses", response_model=PartitionVersesResponse)
async def get_unit_verses(kind: PartitionKind, number: int):
    partition = get_partition(kind)
    unit = partition.get_unit(number)
    keys = [str(k) for k in partition.ayah_keys_in_unit(number)]
    return PartitionVersesResponse.from_unit(unit, verse_keys=keys)
