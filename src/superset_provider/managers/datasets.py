import logging
from typing import List, Dict, Any

from ..models import DatasetRecord
from .base import BaseManager, PAGE_QUERY

logger = logging.getLogger(__name__)


class DatasetManager(BaseManager):
    async def list(self) -> List[DatasetRecord]:
        """
        List all datasets.
        """
        response = await self._get(f"/dataset/?{PAGE_QUERY}")
        return self._decode_list(DatasetRecord, response)

    async def get(self, dataset_id: int) -> DatasetRecord:
        """
        Get a dataset by ID.

        Raises:
            NotFoundError: If the dataset does not exist.
        """
        response = await self._get(f"/dataset/{dataset_id}")
        return self._decode_result(DatasetRecord, response)

    async def create(self, payload: Dict[str, Any]) -> int:
        """
        Create a dataset.

        Args:
            payload: table_name, database ID and optional schema/sql.

        Returns:
            The ID assigned to the dataset.
        """
        logger.debug(f"Creating dataset with payload {payload}")
        response = await self._post("/dataset/", json=payload)
        dataset_id = self._created_id(response)
        logger.info(f"Created dataset '{payload.get('table_name')}' with ID {dataset_id}")
        return dataset_id

    async def update(self, dataset_id: int, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        Update a dataset. The database a dataset belongs to cannot be changed,
        so `payload` never carries it.
        """
        logger.debug(f"Updating dataset {dataset_id} with payload {payload}")
        return await self._put(f"/dataset/{dataset_id}", json=payload)

    async def delete(self, dataset_id: int) -> Dict[str, Any]:
        return await self._delete(f"/dataset/{dataset_id}")
