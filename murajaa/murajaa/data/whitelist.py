"""
Uthmani to modern spelling whitelist.

Canonical (Uthmani-derived) spellings mapped to the spellings a speech-to-text
engine typically produces for them. Entries are raw text; the matcher
normalizes keys and variants once when it builds its lookup table.
"""

UTHMANI_MODERN_WHITELIST: dict[str, tuple[str, ...]] = {
    # Alef differences
    "الرحمان": ("الرحمن", "رحمن", "الرحمان"),
    "العالمين": ("العلمين", "عالمين", "علمين"),
    "الصراط": ("السراط", "صراط", "سراط"),
    "ابراهيم": ("إبراهيم", "ابراهيم"),
    "اسماعيل": ("إسماعيل", "اسمعيل", "إسمعيل"),
    "اسحاق": ("إسحاق", "اسحق", "إسحق"),
    "الملائكة": ("الملئكة", "ملائكة", "ملئكة"),
    "لااله": ("لا إله", "لا اله", "لاإله"),

    # Final hamza dropped in speech
    "السماء": ("السما", "سماء", "سما"),
    "الماء": ("الما", "ماء", "ما"),
    "الدعاء": ("الدعا", "دعاء", "دعا"),
    "البلاء": ("البلا", "بلاء", "بلا"),
    "الشفاء": ("الشفا", "شفاء", "شفا"),

    # Waw-spelled alef (salah, zakah, hayah)
    "الصلاة": ("الصلوة", "صلاة", "صلوة"),
    "الزكاة": ("الزكوة", "زكاة", "زكوة"),
    "الحياة": ("الحيوة", "حياة", "حيوة"),

    # Al-Fatiha
    "اياك": ("إياك", "اياك"),
    "انعمت": ("أنعمت", "انعمت"),
    "المغضوب": ("المغضوب", "مغضوب"),
    "الضالين": ("الضآلين", "ضالين", "الظالين"),

    # Al-Baqarah openings
    "الم": ("الم", "ألم"),
    "الكتاب": ("الكتب", "كتاب"),
    "المتقين": ("المتقين", "متقين"),
    "الغيب": ("الغيب", "غيب"),
    "المفلحون": ("المفلحون", "مفلحون"),

    # Waw / alef spelling
    "ادا": ("إذا", "اذا"),
    "هاؤلاء": ("هؤلاء", "هولاء"),
    "اولائك": ("أولئك", "اولئك", "أولاءك"),

    # Sun-letter assimilation
    "الناس": ("الناس", "ناس"),
    "النار": ("النار", "نار"),
    "الليل": ("الليل", "ليل"),
    "النور": ("النور", "نور"),
    "الرحمن": ("الرحمن", "رحمن"),
    "الرحيم": ("الرحيم", "رحيم"),
    "الرب": ("الرب", "رب"),

    # Short words the engine merges or respells
    "في": ("فى", "في"),
    "على": ("علي", "على"),
    "الى": ("إلى", "الي", "إلي"),
    "من": ("من", "مِن"),
    "ما": ("ما", "مَا"),
    "لا": ("لا", "لآ"),
    "الا": ("إلا", "الا", "إلّا"),

    # Quran-specific terms
    "القران": ("القرءان", "قرآن", "القرآن"),
    "الايات": ("الآيات", "ايات", "آيات"),
    "يايها": ("يا أيها", "ياأيها", "يأيها"),
}
