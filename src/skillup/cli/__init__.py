"""Command-line interface for SkillUp."""
