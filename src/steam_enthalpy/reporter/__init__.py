"""History exports: console, JSON, Excel and SVG."""
