"""textnote - dated plain-text notes with monthly archives."""
