"""Hotels, their rooms, room types and image galleries."""
