"""Command line front end for dotsig."""
