"""
cmdlore categories: folder-depth bucketing and content-pattern classification.

Two independent sources produce a label for a script:
- folder category: the folder segments between the configured base path and
  the file name, minus ignored names, cut to config.depth and joined with
  " / " (e.g. "Networking / DNS").
- pattern category: the label of the first CATEGORY_RULES entry whose pattern
  matches "<path>\\n<text>".

Resolution
- prefer_folder: folder, else pattern, else "General".
- otherwise:     pattern, else folder, else "General".

CATEGORY_RULES is ordered and first match wins. Overlapping vocabulary is
resolved by that order (e.g. "Snapshot" lands in Virtualization, not in
Backup and DR), so entries must not be re-sorted.
"""
import re

FALLBACK_CATEGORY = "General"
FOLDER_SEPARATOR = " / "


def _rule(words, label):
    return re.compile(r"\b(%s)\b" % words, re.IGNORECASE), label


CATEGORY_RULES = (
    _rule(r"M365|O365|Office365|ExchangeOnline|SharePointOnline|OneDrive|Teams|Outlook|Planner|PowerPlatform|PowerApps|PowerAutomate", "Microsoft 365"),
    _rule(r"ActiveDirectory|ADFS|ADDS|DomainController|SAMAccount|Kerberos|LDAP|AAD|AzureAD|EntraID", "Identity"),
    _rule(r"Security|SecPol|ACL|Permissions|Credential|Secrets|PKI|Certificate|TLS|SSL|Firewall|Malware|Virus|Defender|AppLocker|BitLocker|Encryption", "Security"),
    _rule(r"Intune|SCCM|ConfigMgr|EndpointManager|MDM|GPO|GroupPolicy", "Endpoint Mgmt"),
    _rule(r"Azure|ARM|ResourceGroup|VMSS|AKS|AppService|KeyVault|StorageAccount|CosmosDB|LogicApp|FunctionApp|VNet|NSG", "Azure"),
    _rule(r"Jira|Confluence|DevOps|Agile|Scrum|Kanban|Trello|Asana", "Dev/Work Mgmt"),
    _rule(r"Hyper-V|VMware|vSphere|ESXi|VirtualBox|VHDX?|Snapshot|Checkpoint", "Virtualization"),
    _rule(r"Docker|Podman|Containerd|K8s|Kubernetes|Helm|Image|Container", "Containers"),
    _rule(r"DevOps|Terraform|Ansible|Chef|Puppet|Bicep|ARMTemplate|CI/CD|Pipeline|Jenkins|Octopus", "DevOps/IaC"),
    _rule(r"SQLServer|MSSQL|Postgres|PostgreSQL|MySQL|MariaDB|OracleDB|MongoDB|Redis|Database|SQLite", "Databases"),
    _rule(r"OAuth|OIDC|SAML|JWT|FIDO2|MFA|2FA|SSO|AuthN|AuthZ", "Auth Standards"),
    _rule(r"AWS|AmazonWebServices|EC2|S3|GCP|GoogleCloud|BigQuery|CloudRun", "Cloud Vendors"),
    _rule(r"Network|NetCfg|DNS|DHCP|IPConfig|Ping|Traceroute|Subnet|Routing|Switch|Router|WiFi|NAT|Port|TCP|UDP|SSLVPN|VPN", "Networking"),
    _rule(r"PowerShell|Bash|Python|CSharp|C#|JavaScript|TypeScript|GoLang?|Rust|Perl|Ruby", "Languages"),
    _rule(r"Backup|Restore|Recovery|Snapshot|Replication|Failover|DisasterRecovery|DR|Veeam", "Backup and DR"),
    _rule(r"Exchange|SMTP|IMAP|POP3|Mailbox|MailFlow|SendMail", "Email"),
    _rule(r"Help|Get-Help|About_|Info|Discover|WhatIf", "Help/Discovery"),
    _rule(r"Process|Tasklist|Taskkill|Get-Process|ProcMon|Handle", "Processes"),
    _rule(r"Service|Get-Service|Set-Service|Start-Service|Stop-Service|Restart-Service", "Services"),
    _rule(r"File|Folder|Directory|Path|Copy-Item|Move-Item|Remove-Item|Rename-Item|New-Item|Get-ChildItem|Tree", "Files/Directories"),
    _rule(r"Registry|RegKey|HKLM|HKCU|HKCR|HKU|HKCC|Get-ItemProperty|Set-ItemProperty", "Registry"),
    _rule(r"EventLog|Get-EventLog|Get-WinEvent|LogName|ApplicationLog|SystemLog|Audit", "Events/Logs"),
    _rule(r"Device|PnP|Driver|Hardware|Disk|Volume|Partition|USB|PrinterPort|Monitor|Battery|Adapter", "Hardware/Devices"),
    _rule(r"Print|Printer|PrintJob|Spooler|PrintQueue", "Printing"),
    _rule(r"Update|Patch|WUInstall|WindowsUpdate|KB\d+", "Updates"),
    _rule(r"User|Group|LocalUser|LocalGroup|Account|SID|Profile|Credential|NTUser", "Users/Groups"),
    _rule(r"PerfMon|Performance|Counter|ResourceMonitor|CPU|Memory|DiskIO|Latency|Benchmark", "Performance"),
    _rule(r"PowerPlan|Battery|Sleep|Hibernate|Shutdown|Restart|Reboot|UPS", "Power"),
    _rule(r"Display|Resolution|Monitor|Screen|Graphics|DPI|Color|Brightness", "Display"),
    _rule(r"Keyboard|Mouse|Input|HID|Touchpad|Tablet|Pen", "Input"),
    _rule(r"Audio|Sound|Speaker|Microphone|Mute|Volume", "Audio"),
    _rule(r"Troubleshoot|Diag|Diagnosis|Fix|Repair|Checkup|Health|SFC|DISM", "Troubleshooting"),
    _rule(r"Install|Setup|Deployment|Sysprep|ImageX|WIM|ISO|Provisioning", "Installation"),
    _rule(r"Recovery|WinRE|Reset|RestorePoint|SystemRestore|BootRepair", "Recovery"),
    _rule(r"Util|Utility|Tool|Script|Helper|AdminTool|Sysinternals", "Utilities"),
)


def folder_category(config, path, /):
    """
    Return the folder-derived category of a script path ("" when none).
    """
    path = path.replace("\\", "/")
    base = config.path
    if (index := path.lower().find(base.lower())) >= 0:
        relative = path[index + len(base):].lstrip("/")
    else:
        relative = path

    ignore = config.ignore
    segments = [
        segment for segment in relative.split("/")[:-1]
        if segment and segment.lower() not in ignore
    ]
    return FOLDER_SEPARATOR.join(segments[:config.depth])


def pattern_category(path, text=None, /):
    """
    Return the label of the first rule matching "<path>\\n<text>" ("" when none).
    """
    probe = f"{path}\n{text or ''}"
    for pattern, label in CATEGORY_RULES:
        if pattern.search(probe):
            return label
    return ""


def derive_category(config, path, text=None, /):
    """
    Resolve the category label of a script from its path and optional text.
    """
    if config.prefer_folder:
        return folder_category(config, path) or pattern_category(path, text) or FALLBACK_CATEGORY
    return pattern_category(path, text) or folder_category(config, path) or FALLBACK_CATEGORY


__all__ = (
    "CATEGORY_RULES",
    "FALLBACK_CATEGORY",
    "folder_category",
    "pattern_category",
    "derive_category",
)
