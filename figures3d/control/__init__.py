"""Control window, slider widgets and the shell-owned render configuration."""
