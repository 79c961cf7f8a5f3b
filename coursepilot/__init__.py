"""CoursePilot: elective course reviews from a published spreadsheet."""
