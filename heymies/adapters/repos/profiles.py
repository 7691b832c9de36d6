# heymies/adapters/repos/profiles.py
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ...models import Profile, ProfileRole


class ProfileRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, user_id: str) -> Profile | None:
        return (await self.session.execute(select(Profile).where(Profile.user_id == user_id))).scalars().first()

    async def claim(
        self,
        user_id: str,
        role: ProfileRole,
        *,
        full_name: str | None = None,
        phone: str | None = None,
    ) -> Profile:
        """
        Create the user's profile with `role`, or refresh name/phone on an existing one.
        A user keeps the role they first signed up with: claiming a different one raises PermissionError.
        """
        profile = await self.get(user_id)
        if profile is None:
            profile = Profile(user_id=user_id, role=role)
            self.session.add(profile)
        elif profile.role != role:
            raise PermissionError(f"Account is already registered as {profile.role.value}")

        if full_name:
            profile.full_name = full_name
        if phone:
            profile.phone = phone

        await self.session.flush()
        return profile
