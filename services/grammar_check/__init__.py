"""Grammar check pipeline: language heuristic, prompts, model call, extraction."""
