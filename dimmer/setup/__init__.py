from .orchestrator import NegotiationState, SetupOrchestrator

__all__ = ["NegotiationState", "SetupOrchestrator"]
