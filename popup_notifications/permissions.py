SETTINGS_PERMISSION = "preferences.change_sitesetting"


def can_manage_popups(user) -> bool:
    if not (user and user.is_authenticated and user.is_active):
        return False
    return bool(user.is_staff and user.has_perm(SETTINGS_PERMISSION))
