"""Sample data: trees, insects and their associations, each with up/down."""
