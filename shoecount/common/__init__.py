"""Card primitives and I/O helpers shared by the shoecount modules."""
