"""Citation resolution: payload decoding, title matching and rendering."""
