"""MindCheck supportive chat companion."""
