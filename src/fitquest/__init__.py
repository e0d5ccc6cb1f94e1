"""fitquest: progression and economy engine for a gamified workout tracker."""

__version__ = "0.1.0"
