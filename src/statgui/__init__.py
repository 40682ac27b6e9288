"""statgui: rolling numeric inputs for a game-stats configuration UI."""

__version__ = "0.1.0"
