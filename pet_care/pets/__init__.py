"""宠物档案。"""
from pet_care.pets.models import Pet
from pet_care.pets.store import PetStore

__all__ = ["Pet", "PetStore"]
