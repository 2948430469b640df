"""Calendar resolution, display labels and input clamping."""
