from typing import List, Optional

from healthwatch.modules.profiles.models import Profile
from healthwatch.modules.profiles.schemas import ProfileCreate
from healthwatch.shared.constants import Role


class ProfileService:
    async def create(self, profile_in: ProfileCreate) -> Profile:
        existing = await Profile.find_one({"user_id": profile_in.user_id})
        if existing:
            raise ValueError("profile already exists for this user")
        profile = Profile(**profile_in.model_dump())
        await profile.insert()
        return profile

    async def get_multi(
        self, role: Optional[Role] = None, village: Optional[str] = None
    ) -> List[Profile]:
        filters: dict[str, object] = {}
        if role is not None:
            filters["role"] = role.value
        if village:
            filters["village"] = village
        profiles: List[Profile] = await Profile.find(filters).sort("+created_at").to_list()
        return profiles
