"""Falling-block puzzle rule engine with a pygame front end."""
