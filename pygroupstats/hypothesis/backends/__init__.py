"""Test implementations dispatched by CPUHypothesisBackend."""
