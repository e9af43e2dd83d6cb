"""Default exception list for the documentation site spell-checker."""

DEFAULT_PATTERNS: tuple[str, ...] = (
    # e.g. FooBar
    r"^[A-Z].*",
    # e.g. fooBar or .fooBar
    r"^\.?[a-z0-9].*[A-Z0-9].*",
    # e.g foo_bar or foo-bar-baz
    r"^[a-z]*[-_][a-z]+.*",
    # e.g. package:melos
    r"^package:.*",
)

# Case-sensitive; both casings are listed where the docs use both.
DEFAULT_WORDS: tuple[str, ...] = (
    "&raquo",
    ".dex",
    "ai",
    "acs",
    "adb",
    "alloc",
    "analytics",
    "applinks",
    "apns",
    "aps",
    "async",
    "auth",
    "authenticator",
    "backend",
    "backoff",
    "bool",
    "br",
    "buildscript",
    "cd",
    "chainable",
    "changelog",
    "charset",
    "classpath",
    "classpaths",
    "cocoapods",
    "codelab",
    "config",
    "const",
    "crashlytics",
    "crypto",
    "cryptographically",
    "datastore",
    "deprecations",
    "dev",
    "dex",
    "downloader",
    "dropdown",
    "filesystem",
    "facebook",
    "firebase",
    "firestore",
    "flutterfire",
    "FlutterFire",
    "func",
    "getter",
    "getters",
    "globals",
    "gradle",
    "gradlew",
    "href",
    "html",
    "http",
    "https",
    "img",
    "init",
    "installable",
    "ios",
    "javascript",
    "js",
    "json",
    "keychain",
    "localhost",
    "macos",
    "multidex",
    "natively",
    "objectivec",
    "passwordless",
    "plist",
    "realtime",
    "reauthenticate",
    "repo",
    "roadmap",
    "safelist",
    "scalable",
    "sdk",
    "setprop",
    "src",
    "timeframe",
    "twittersdk",
    "unencrypted",
    "unlink",
    "unlinked",
    "unlinking",
    "untampered",
    "untrusted",
    "url",
    "uri",
    "verifications",
    "web.firebase_cdn",
    "xml",
    "yaml",
    "fiam",
    "ecommerce",
    "programmatically",
    "postfix",
    "validator",
    "validators",
    "schemas",
    "subcollection",
    "subcollections",
    "dartpad",
    "customizable",
    "ui",
)
