"""
Gemini Inference Provider

Scan analysis through Google Gemini via LangChain. Each call sends the scan
as an inline image plus a task prompt, requests JSON output and validates it
against the tagged payload schemas. Failures are raised, never replaced with
mock data.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Type, TypeVar
from enum import Enum
from datetime import datetime
import json
import os

from langchain_core.messages import HumanMessage
from langchain_google_genai import ChatGoogleGenerativeAI
from pydantic import BaseModel, ValidationError

from medtriage.core.clinical.base import HealthDomain, ImagePayload, ScanType
from medtriage.core.clinical.payloads import (
    BreastImagingPayload,
    GenericFindingsPayload,
    LandmarkPayload,
)
from medtriage.utils import ConfigurationError, InferenceError, get_logger
from .base import InferenceProvider
from .prompts import BREAST_IMAGE_PROMPT, JSON_INSTRUCTION, landmark_prompt, scan_prompt

logger = get_logger(__name__)

PayloadT = TypeVar("PayloadT", bound=BaseModel)


class GeminiModel(str, Enum):
    """Gemini models suitable for multimodal scan analysis."""
    FLASH_2_5 = "gemini-2.5-flash"  # Stable standard
    FLASH_2_5_LITE = "gemini-2.5-flash-lite"
    PRO_2_5 = "gemini-2.5-pro"


@dataclass
class GeminiConfig:
    """Configuration for the Gemini provider."""
    api_key: Optional[str] = field(default_factory=lambda: os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY"))
    model: str = GeminiModel.FLASH_2_5.value
    temperature: float = 0.2
    max_output_tokens: int = 4096
    request_timeout_seconds: int = 60
    max_retries: int = 2


def _prompt_schema(model: Type[BaseModel], exclude: tuple = ()) -> str:
    """JSON schema shown to the model, without the internal tag field."""
    schema = model.model_json_schema()
    properties: Dict[str, Any] = schema.get("properties", {})
    for name in ("kind",) + tuple(exclude):
        properties.pop(name, None)
    return json.dumps(schema)


def _strip_fences(text: str) -> str:
    text = text.strip()
    if text.startswith("```"):
        text = text.split("\n", 1)[1] if "\n" in text else ""
        if text.rstrip().endswith("```"):
            text = text.rstrip()[:-3]
    return text.strip()


class GeminiInferenceProvider(InferenceProvider):
    """
    Inference provider backed by Gemini.

    Construct once with a GeminiConfig; rotate credentials by constructing
    a new provider.
    """

    name = "gemini"

    def __init__(self, config: Optional[GeminiConfig] = None, llm: Optional[Any] = None):
        self.config = config or GeminiConfig()
        self._request_count = 0
        self._last_request_time: Optional[datetime] = None

        if llm is not None:
            self._llm = llm
            return

        if not self.config.api_key:
            raise ConfigurationError(
                "Gemini inference requires GEMINI_API_KEY or GOOGLE_API_KEY",
                setting="GEMINI_API_KEY",
            )

        self._llm = ChatGoogleGenerativeAI(
            model=self.config.model,
            temperature=self.config.temperature,
            max_output_tokens=self.config.max_output_tokens,
            timeout=self.config.request_timeout_seconds,
            max_retries=self.config.max_retries,
            google_api_key=self.config.api_key,
            response_mime_type="application/json",
        )
        logger.info(f"Gemini inference provider initialized with model: {self.config.model}")

    async def analyze_scan(
        self,
        image: ImagePayload,
        domain: HealthDomain,
        scan_type: ScanType,
        include_bi_rads: bool = False,
    ) -> GenericFindingsPayload:
        exclude = () if include_bi_rads else ("bi_rads",)
        prompt = scan_prompt(domain, scan_type)
        payload = await self._invoke(image, prompt, GenericFindingsPayload, _prompt_schema(GenericFindingsPayload, exclude))
        if not include_bi_rads and payload.bi_rads is not None:
            payload = payload.model_copy(update={"bi_rads": None})
        return payload

    async def analyze_breast_image(self, image: ImagePayload) -> BreastImagingPayload:
        return await self._invoke(image, BREAST_IMAGE_PROMPT, BreastImagingPayload, _prompt_schema(BreastImagingPayload))

    async def detect_landmarks(self, image: ImagePayload, landmark_names: List[str]) -> LandmarkPayload:
        return await self._invoke(
            image,
            landmark_prompt(landmark_names),
            LandmarkPayload,
            _prompt_schema(LandmarkPayload),
        )

    async def _invoke(
        self,
        image: ImagePayload,
        prompt: str,
        payload_type: Type[PayloadT],
        schema: str,
    ) -> PayloadT:
        message = HumanMessage(content=[
            {"type": "image_url", "image_url": f"data:{image.mime_type};base64,{image.base64_data}"},
            {"type": "text", "text": f"{prompt}\n\n{JSON_INSTRUCTION.format(schema=schema)}"},
        ])

        start_time = datetime.now()
        try:
            response = await self._llm.ainvoke([message])
        except Exception as e:
            logger.error(f"Gemini call failed for {payload_type.__name__}: {e}")
            raise InferenceError(f"Gemini call failed: {e}", provider=self.name) from e

        latency = (datetime.now() - start_time).total_seconds() * 1000
        self._request_count += 1
        self._last_request_time = datetime.now()

        text = response.content if hasattr(response, "content") else str(response)
        if isinstance(text, list):
            text = "".join(part.get("text", "") if isinstance(part, dict) else str(part) for part in text)

        logger.info(f"Gemini {payload_type.__name__} response in {latency:.0f} ms")
        return self._parse(_strip_fences(text), payload_type)

    def _parse(self, text: str, payload_type: Type[PayloadT]) -> PayloadT:
        try:
            data = json.loads(text)
            # Landmark detection answers with a bare array
            if payload_type is LandmarkPayload and isinstance(data, list):
                data = {"landmarks": data}
            return payload_type.model_validate(data)
        except (json.JSONDecodeError, ValidationError) as e:
            raise InferenceError(
                f"Unparseable {payload_type.__name__} from Gemini",
                provider=self.name,
                details={"reason": str(e)[:500]},
            ) from e

    def get_stats(self) -> Dict[str, Any]:
        """Get provider statistics."""
        return {
            "provider": self.name,
            "model": self.config.model,
            "request_count": self._request_count,
            "last_request": self._last_request_time.isoformat() if self._last_request_time else None,
        }
