"""Front ends for Grido. Import `renderer`/`human_play` explicitly; they need pygame."""
