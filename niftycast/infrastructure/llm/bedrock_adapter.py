"""
Infrastructure adapter: Amazon Bedrock (ChatBedrock) -> ILanguageModel.

All ChatBedrock / langchain_aws details are confined here. The model id,
temperature and request timeout are constructor arguments; the composition
root reads them from the environment.
"""

import os
from typing import Any, Optional

from botocore.config import Config
from langchain_aws import ChatBedrock

from niftycast.domain.ports.llm_port import ILanguageModel


class BedrockChatAdapter(ILanguageModel):
    """Wraps ChatBedrock and exposes the ILanguageModel interface."""

    MODEL_ID = "us.amazon.nova-pro-v1:0"

    def __init__(
        self,
        model_id: Optional[str] = None,
        temperature: float = 0.5,
        timeout_seconds: float = 60.0,
        region: Optional[str] = None,
    ) -> None:
        self._llm = ChatBedrock(
            model=model_id or self.MODEL_ID,
            model_kwargs={"temperature": temperature},
            region_name=region or os.environ.get("AWS_DEFAULT_REGION", "us-east-1"),
            config=Config(read_timeout=timeout_seconds, retries={"max_attempts": 1}),
        )

    def invoke(self, messages: list[Any], config: Optional[dict] = None) -> Any:
        return self._llm.invoke(messages, config=config)
