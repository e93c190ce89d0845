"""Core flow components: delegation, quoting, authorization, execution."""
