"""Services for external integrations."""

from mentorhub.services.ai_functions import AIFunctionError, AIFunctionsClient, ai_functions

__all__ = ["AIFunctionError", "AIFunctionsClient", "ai_functions"]
