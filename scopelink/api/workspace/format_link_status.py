from .PackageLinkStatus import PackageLinkStatus

NO_LINKS_MESSAGE = "No linked dependencies found in workspace."


def format_link_status(statuses: list[PackageLinkStatus]) -> str:
    if not statuses:
        return NO_LINKS_MESSAGE

    lines = [f"Found {len(statuses)} package(s) with linked dependencies:", ""]
    for status in statuses:
        lines.append(f"📦 {status.name}")
        lines.append(f"   Path: {status.directory}")
        lines.append("   Linked dependencies:")
        for link in status.links:
            kind = "🔗 External" if link.is_external else "🔗 Internal"
            lines.append(f"     {kind} {link.dependency_name} -> {link.target_path}")
        lines.append("")
    return "\n".join(lines)
