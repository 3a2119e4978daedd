"""hexstack - scaffold Rust web projects from prebuilt templates."""

__version__ = "0.3.0"
