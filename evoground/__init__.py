"""evoground - proste strategie ewolucyjne (mu+lambda) i (1+1) dla skalarnej funkcji celu."""
