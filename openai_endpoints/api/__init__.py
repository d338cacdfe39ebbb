"""API subsystem.

One wrapper per REST base path, all sharing the client's session:
- models, files, fine-tunes
- completions, edits, embeddings
- images, moderations
"""

from __future__ import annotations

from .base import BaseEndpoint
from .completions import CompletionsEndpoint
from .edits import EditsEndpoint
from .embeddings import EmbeddingsEndpoint
from .files import FilesEndpoint
from .fine_tuning import FineTuningEndpoint
from .images import ImagesEndpoint
from .models import ModelsEndpoint
from .moderations import ModerationsEndpoint

__all__ = [
    "BaseEndpoint",
    "CompletionsEndpoint",
    "EditsEndpoint",
    "EmbeddingsEndpoint",
    "FilesEndpoint",
    "FineTuningEndpoint",
    "ImagesEndpoint",
    "ModelsEndpoint",
    "ModerationsEndpoint",
]
