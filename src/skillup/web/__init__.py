"""Web API for the SkillUp platform."""
