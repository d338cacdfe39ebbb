"""List and describe the models available to the account.

<https://platform.openai.com/docs/api-reference/models>
"""

from __future__ import annotations

from ..core.errors import OpenAIError
from ..core.timing_logger import timed
from ..types.models import DeleteModelResponse, Model, ModelsList
from .base import BaseEndpoint


class ModelsEndpoint(BaseEndpoint):
    path = "models"

    @timed
    async def list_models(self) -> list[Model]:
        """Return every model visible to the caller."""
        result = await self._call(ModelsList, "GET", self.endpoint, operation="list_models")
        return result.data

    @timed
    async def retrieve_model(self, model_id: str) -> Model:
        """Return details for one model id."""
        return await self._call(Model, "GET", self._url(model_id), operation="retrieve_model")

    @timed
    async def delete_fine_tune_model(self, model_id: str) -> bool:
        """Delete a fine-tuned model. Requires the Owner role in the organization.

        The model is looked up first so that a bad id fails before the DELETE.

        Returns:
            True if the API reports the model as deleted.
        """
        model = await self.retrieve_model(model_id)
        if not model.id:
            raise OpenAIError(f"Failed to get {model_id} info!")
        result = await self._call(
            DeleteModelResponse,
            "DELETE",
            self._url(model.id),
            operation="delete_fine_tune_model",
        )
        return result.deleted
