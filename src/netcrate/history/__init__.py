"""Result history for the netcrate runner."""
