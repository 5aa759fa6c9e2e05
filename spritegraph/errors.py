class SceneContractError(ValueError):
    """A node was built or found in a state the compositor cannot render."""
