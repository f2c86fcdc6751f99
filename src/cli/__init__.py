"""CLI (Typer + Rich): comandos `sync`, `show`, `setup` y `doctor`."""
