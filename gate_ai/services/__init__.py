from .ai_service import AIService
from .interfaces import IAIService, ISynthesisService
from .synthesis_service import SynthesisService

__all__ = ["AIService", "IAIService", "ISynthesisService", "SynthesisService"]
