"""MyPet — virtual pet backend."""
