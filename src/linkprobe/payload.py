"""
The lock-stake payload written to the primary file.

An illustrative edit-lock record as written by OpenAccess-based EDA tools.
Written verbatim, never substituted.
"""

LOCK_STAKE_PAYLOAD = (
    "#\n"
    "# Edit Lock-Stake file. CAUTION: Please do not change.\n"
    "#\n"
    "# Information about current Edit Lock Owner.\n"
    "#\n"
    "LockStakeVersion               1.1\n"
    "LoginName                      nmjxv3\n"
    "HostName                       r07ses8t7.managed.mst.edu\n"
    "ProcessIdentifier              10284\n"
    "ProcessCreationTime_UTC        1365704606\n"
    "ProcessCreationTime_Readable   Thu Apr 11 13:23:26 2013 CDT\n"
    "AppIdentifier                  OA File System Design Manager\n"
    "OSType                         unix\n"
    "ReasonForPlacingEditLock       OpenAccess edit lock\n"
    "FilePathUsedToEditLock         /usr/local/home/nmjxv3/dfshack/mount/asdf7/PadBoxX/layout/layout.oa.cdslck\n"
    "TimeEditLocked                 Thu Apr 11 13:23:34 2013 CDT\n"
)

PAYLOAD_BYTES = LOCK_STAKE_PAYLOAD.encode("ascii")
