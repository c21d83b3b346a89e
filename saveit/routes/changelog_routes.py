from flask import Blueprint
import logging

from saveit.cache import get_kv_client
from saveit.safe_route import user_route
from saveit.schemas import ChangelogVersionBody
from saveit.services.changelog_service import ChangelogDismissalStore

logger = logging.getLogger(__name__)

changelog_bp = Blueprint('changelog', __name__)


@changelog_bp.route('/check-dismissed', methods=['POST'])
@user_route.body(ChangelogVersionBody).handler
def check_dismissed(request, args):
    store = ChangelogDismissalStore(get_kv_client())
    return {'isDismissed': store.is_dismissed(args.ctx.user.id, args.body.version)}


@changelog_bp.route('/dismiss', methods=['POST'])
@user_route.body(ChangelogVersionBody).handler
def dismiss(request, args):
    store = ChangelogDismissalStore(get_kv_client())
    store.mark_dismissed(args.ctx.user.id, args.body.version)
    return {'success': True}
