"""GitHub integration: repository references, URLs, templates and the issues gateway."""
