"""Contact form and draft refinement services."""
