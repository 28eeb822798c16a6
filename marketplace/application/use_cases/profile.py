import logging

from marketplace.api.schemas.profile import ProfileResponse, UpdateProfileRequest, UserProfile
from marketplace.application.dtos.request_context import RequestContext
from marketplace.application.interfaces.transaction_manager import TransactionManager
from marketplace.application.interfaces.user_repo import ProfileUpdate, UserRepo
from marketplace.domain.errors import UserNotFoundError


class GetProfileUseCase:
    def __init__(self, user_repo: UserRepo) -> None:
        self._user_repo = user_repo

    async def execute(self, context: RequestContext) -> ProfileResponse:
        user = await self._user_repo.get(context.tenant_id, context.user_id)
        if not user:
            raise UserNotFoundError(context.user_id)
        return ProfileResponse(user=UserProfile.from_record(user))


class UpdateProfileUseCase:
    def __init__(self, user_repo: UserRepo, transaction_manager: TransactionManager) -> None:
        self._user_repo = user_repo
        self._transaction_manager = transaction_manager
        self._logger = logging.getLogger(__name__)

    async def execute(
        self,
        context: RequestContext,
        request: UpdateProfileRequest,
    ) -> ProfileResponse:
        async with self._transaction_manager.start():
            user = await self._user_repo.update_profile(
                context.tenant_id,
                context.user_id,
                ProfileUpdate(
                    first_name=request.first_name,
                    last_name=request.last_name,
                    phone=request.phone,
                    address=request.address,
                ),
            )
            if not user:
                raise UserNotFoundError(context.user_id)
        self._logger.info("Profile updated", extra={"user_id": context.user_id})
        return ProfileResponse(user=UserProfile.from_record(user))
