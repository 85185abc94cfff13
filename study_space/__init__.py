"""Study Space reading library: catalog filtering, view state and storage."""
