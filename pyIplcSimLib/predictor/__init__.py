from .static import StaticPredictor
