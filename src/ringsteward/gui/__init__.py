"""Qt integration for Ring Steward."""
