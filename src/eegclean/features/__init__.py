"""Time-frequency features used to score independent components."""
