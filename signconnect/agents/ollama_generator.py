"""
Suggestion generator backed by a local Ollama model.
"""

from typing import Any, Dict, Optional
from datetime import datetime

import ollama
from pydantic import ValidationError

from .suggestions import ISuggestionGenerator, SuggestionSet, SYSTEM_PROMPT, build_prompt
from ..core.errors import GeneratorRefused, GeneratorUnavailable


class OllamaSuggestionGenerator(ISuggestionGenerator):
    """
    Generates suggestions with an Ollama chat model.
    The reply is constrained to the SuggestionSet JSON schema and validated on return.
    """

    def __init__(self, model_name: str, host: Optional[str] = None, client: Optional[ollama.AsyncClient] = None,
                 temperature: float = 0.7):
        self.model_name = model_name
        self.name = f"ollama/{model_name}"
        self.temperature = temperature
        self.client = client or ollama.AsyncClient(host=host)

    async def generate(self, text: str, context_label: Optional[str] = None) -> SuggestionSet:
        messages = [
            {'role': 'system', 'content': SYSTEM_PROMPT},
            {'role': 'user', 'content': build_prompt(text, context_label)}
        ]

        try:
            response = await self.client.chat(
                model=self.model_name,
                messages=messages,
                format=SuggestionSet.model_json_schema(),
                options={
                    'temperature': self.temperature,
                    'top_p': 0.9
                }
            )
        except ollama.ResponseError as e:
            raise GeneratorUnavailable(f"Ollama model error: {e}") from e
        except Exception as e:
            raise GeneratorUnavailable(f"Ollama request failed: {e}") from e

        content = (response['message']['content'] or '').strip()
        if not content:
            raise GeneratorRefused(f"{self.model_name} returned an empty reply")

        try:
            return SuggestionSet.model_validate_json(content)
        except ValidationError as e:
            raise GeneratorRefused(f"{self.model_name} reply did not match the suggestion schema") from e

    async def health_check(self) -> bool:
        """Check if Ollama is reachable and the model is pulled."""
        try:
            models = await self.client.list()
            model_names = [model['model'] for model in models['models']]
            return self.model_name in model_names
        except Exception:
            return False

    def get_status(self) -> Dict[str, Any]:
        status = super().get_status()
        status.update({
            'model_name': self.model_name,
            'temperature': self.temperature,
            'timestamp': datetime.now().isoformat()
        })
        return status
