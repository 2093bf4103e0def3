"""Library for reading TZif files into zone rules."""
