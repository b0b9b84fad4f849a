from .leadgen import router as leadgen_router

__all__ = ["leadgen_router"]
