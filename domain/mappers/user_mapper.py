"""
User domain mappers.
Handles transformation between ORM models and DTOs for user-related entities.
"""

from typing import Iterable, List, Tuple
from domain.models import User, UserAllergy, Allergy
from domain.schemas.user_schemas import UserResponse, MyProfileResponse
from domain.schemas.allergy_schemas import UserAllergyResponse


class UserMapper:
    """Mapper for user-related transformations."""

    @staticmethod
    def to_response(user: User) -> UserResponse:
        return UserResponse.model_validate(user)

    @staticmethod
    def allergies_to_response(
        links: Iterable[Tuple[UserAllergy, Allergy]]
    ) -> List[UserAllergyResponse]:
        """
        Convert joined (UserAllergy, Allergy) rows into allergy link DTOs.

        Args:
            links: rows as returned by UserAllergyRepository.get_with_names

        Returns:
            List of UserAllergyResponse in the order given
        """
        return [
            UserAllergyResponse(
                allergy_id=allergy.allergy_id,
                name=allergy.name,
                notes=link.notes or "",
            )
            for link, allergy in links
        ]

    @staticmethod
    def to_profile_response(
        user: User, links: Iterable[Tuple[UserAllergy, Allergy]]
    ) -> MyProfileResponse:
        """
        Convert a User plus its joined allergy links to the self-service profile DTO.
        """
        base = UserResponse.model_validate(user).model_dump()
        return MyProfileResponse(
            **base,
            allergies=UserMapper.allergies_to_response(links),
        )
