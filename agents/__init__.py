"""Reference agents for the tower stacking environment."""
