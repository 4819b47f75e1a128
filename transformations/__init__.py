"""CloudEvents transformations that tag Zendesk tickets."""
